"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MDPAGE_ prefix (e.g., MDPAGE_HIGHLIGHT_CODE=true).

Settings can also be loaded from a .env file in the project root.
"""

import html
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MDPAGE_ prefix.

    Examples:
        MDPAGE_HIGHLIGHT_CODE=true
        MDPAGE_PYGMENTS_STYLE=monokai
        MDPAGE_STRICT_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="MDPAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Renderer configuration
    line_break: str = Field(
        default="<br/>\n",
        description="Separator emitted between the lines of a paragraph",
    )

    highlight_code: bool = Field(
        default=False,
        description="Syntax highlight fenced code blocks that name a language (Pygments)",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used when highlight_code is enabled",
    )

    # Compilation configuration
    debug_mode: bool = Field(
        default=False,
        description="Enable debug output during compilation",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: the command line refuses to write a fallback document",
    )

    def verbosity_default(self) -> int:
        """
        Starting verbosity for the command line, before any -v flags.

        Returns:
            3 (debug) when debug_mode is set, otherwise 1 (normal)
        """
        return 3 if self.debug_mode else 1

    def codeClass_make(self, language: Optional[str]) -> str:
        """
        Build the class attribute for a code block's <code> tag.

        Args:
            language: Language tag from the opening fence, or None

        Returns:
            ' class="..."' with the language HTML-escaped, or '' without one

        Example:
            >>> settings = AppSettings()
            >>> settings.codeClass_make('python')
            ' class="python"'
            >>> settings.codeClass_make(None)
            ''
        """
        if not language:
            return ""
        return f' class="{html.escape(language)}"'


# Singleton instance - import this in your code
appsettings = AppSettings()
