"""Domain exceptions shared by services and mapped to HTTP responses in inkwell.main."""


class InkwellError(Exception):
    """Base class for domain errors."""


class InvalidCredentials(InkwellError):
    """Unknown email, wrong password or inactive account. Deliberately indistinguishable."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class Unauthenticated(InkwellError):
    """No authenticated session for an action that needs one."""


class Forbidden(InkwellError):
    """Authenticated session lacks the permission an action requires."""

    def __init__(self, permission: str) -> None:
        # Kept for server-side logging only; never rendered to the client.
        self.permission = permission
        super().__init__("Access denied.")


class StoreUnavailable(InkwellError):
    """The database could not serve a credential or RBAC lookup."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Store unavailable during {operation}")


class DuplicateEmail(InkwellError):
    """Email already registered."""

    field = "email"

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("This email is already in use.")


class DuplicateUsername(InkwellError):
    """Username already taken."""

    field = "username"

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("This username is already in use.")


class DuplicateTag(InkwellError):
    """Tag name or slug already exists."""

    field = "name"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("A tag with this name already exists.")


class DuplicateRole(InkwellError):
    """Role name already exists."""

    field = "name"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("A role with this name already exists.")


class UnknownRole(InkwellError):
    """One or more role ids do not exist."""

    field = "role_ids"

    def __init__(self, role_ids: set[int]) -> None:
        self.role_ids = role_ids
        super().__init__(f"Unknown role ids: {sorted(role_ids)}")


class UnknownPermission(InkwellError):
    """One or more permission names do not exist."""

    field = "permissions"

    def __init__(self, names: set[str]) -> None:
        self.names = names
        super().__init__(f"Unknown permissions: {sorted(names)}")


class NotFound(InkwellError):
    """Requested entity does not exist."""

    def __init__(self, entity: str, entity_id: int | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found.")


class ArticleNotFound(NotFound):
    """Article missing, or hidden from the caller. Both cases look the same."""

    def __init__(self, article_id: int) -> None:
        super().__init__("Article", article_id)


class SelfDeletionRejected(InkwellError):
    """An administrator tried to delete their own account."""

    def __init__(self) -> None:
        super().__init__("You cannot delete your own account.")
