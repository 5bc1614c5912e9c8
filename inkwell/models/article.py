"""ORM models for articles and their tags."""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from inkwell.models.base import Base, enum_values
from inkwell.models.enums import ArticleStatus

article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """Topic label; many-to-many with articles."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)
    slug = Column(String(50), nullable=False, unique=True, index=True)


class Article(Base):
    """
    Blog article. Visibility on public read paths depends only on status
    (see inkwell.services.visibility).
    """

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    featured_image = Column(String(255), nullable=True)
    status = Column(
        Enum(
            ArticleStatus,
            name="article_status",
            native_enum=False,
            length=16,
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=ArticleStatus.DRAFT,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    author = relationship("User", lazy="joined")
    tags = relationship("Tag", secondary=article_tags, order_by="Tag.name")

    @property
    def author_name(self) -> str | None:
        return self.author.username if self.author is not None else None
