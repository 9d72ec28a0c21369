"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use SLIDEMARK_ prefix (e.g., SLIDEMARK_TEMPLATE_MAX_ROUNDS=5).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use SLIDEMARK_ prefix.

    Examples:
        SLIDEMARK_SEPARATOR='\\n===\\n'
        SLIDEMARK_TEMPLATE_EXTENSION=.markdown
        SLIDEMARK_TEMPLATE_MAX_ROUNDS=5
    """

    model_config = SettingsConfigDict(
        env_prefix="SLIDEMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Slide splitting
    separator: str = Field(
        default=r"\r?\n---\r?\n",
        description="Regular expression separating horizontal slides",
    )

    vertical_separator: str = Field(
        default=r"\r?\n--\r?\n",
        description="Regular expression separating vertical slides",
    )

    # Template expansion
    template_extension: str = Field(
        default=".md",
        description="Extension appended to template names that lack it",
    )

    content_placeholder: str = Field(
        default="<% content %>",
        description="Token inside a template replaced by the slide body",
    )

    template_max_rounds: int = Field(
        default=9,
        ge=1,
        description="Maximum number of expansion rounds before giving up",
    )

    # Multi-file embeds
    embed_max_depth: int = Field(
        default=10,
        ge=1,
        description="Maximum nesting depth for ![[note]] embeds",
    )

    def templateFile_name(self, name: str) -> str:
        """
        Normalize a template reference to a file name.

        Args:
            name: Template name as written in the directive

        Returns:
            Name with the template extension appended if it was missing

        Example:
            >>> settings = AppSettings()
            >>> settings.templateFile_name('tpl-basic')
            'tpl-basic.md'
        """
        if name.endswith(self.template_extension):
            return name
        return f"{name}{self.template_extension}"


# Singleton instance - import this in your code
appsettings = AppSettings()
