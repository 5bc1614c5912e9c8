"""ORM model for reader comments."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text, func

from inkwell.models.base import Base, enum_values
from inkwell.models.enums import CommentStatus


class Comment(Base):
    """Reader comment on an article; shown publicly once approved."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(
        Integer,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_name = Column(String(100), nullable=False)
    author_email = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    status = Column(
        Enum(
            CommentStatus,
            name="comment_status",
            native_enum=False,
            length=16,
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=CommentStatus.PENDING,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
