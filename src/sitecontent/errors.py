"""
Exceptions raised while building site content

Every error here is fatal: it unwinds the whole build and no partial
output is produced. Recoverable problems (unknown tags, dangling ids,
missing explainer files) are logged instead of raised.
"""


class ContentError(Exception):
    """Base class for fatal content build errors"""


class FrontmatterError(ContentError):
    """A content file could not be parsed or lacks a mandatory field"""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ImageError(ContentError):
    """An image referenced by a record could not be measured"""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class InvalidSocialUrlError(ContentError):
    """An author social field that must be an absolute URL is not one"""

    def __init__(self, author_id: str, field: str, value: str):
        self.author_id = author_id
        self.field = field
        self.value = value
        super().__init__(
            f"'{author_id}' socials.{field} is not a valid URL: '{value}'"
        )
