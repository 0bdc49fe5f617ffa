"""Exception types raised while building the site.

Every one of these is fatal: the CLI logs the message and exits non-zero.
"""


class SiteError(Exception):
    """Base exception for build failures."""

    pass


class ConfigError(SiteError):
    """Missing directories, unreadable config, unknown timezone."""

    pass


class ContentError(SiteError):
    """A content file or the journal log is malformed."""

    pass


class FrontmatterError(ContentError):
    """Frontmatter block could not be parsed or holds an invalid value."""

    pass


class JournalError(ContentError):
    """Journal log could not be read or has a malformed line."""

    pass


class TemplateLoadError(SiteError):
    """A template is missing or does not compile."""

    pass


class MissingTemplateError(SiteError):
    """A page asked for a template that is not loaded."""

    pass


class RenderError(SiteError):
    """A template failed while rendering."""

    pass


class SiteFrozenError(SiteError):
    """Site aggregate was modified after the sort barrier."""

    pass
