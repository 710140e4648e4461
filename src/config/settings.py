"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use LPML_ prefix (e.g., LPML_HIGHLIGHT_CODE=true).

Settings can also be loaded from a .env file in the working directory.
Defaults reproduce the standard LPML output exactly.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use LPML_ prefix.

    Examples:
        LPML_DOCUMENT_TITLE="My Page"
        LPML_HIGHLIGHT_CODE=true
        LPML_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="LPML_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # File handling
    source_suffix: str = Field(
        default=".lpml",
        description="Required suffix of input files",
    )

    output_suffix: str = Field(
        default=".html",
        description="Suffix substituted for source_suffix when no output path is given",
    )

    # Generation
    document_title: str = Field(
        default="LPML Document",
        description="Text of the generated <title> element",
    )

    indent_width: int = Field(
        default=2,
        ge=0,
        description="Spaces per nesting level in generated HTML",
    )

    highlight_code: bool = Field(
        default=False,
        description="Render [code-start] blocks with a known file_type through Pygments",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used when highlight_code is enabled",
    )

    def sourceSuffix_check(self, path: Path) -> bool:
        """
        Check that a path carries the LPML source suffix.

        Example:
            >>> AppSettings().sourceSuffix_check(Path("page.lpml"))
            True
        """
        return str(path).endswith(self.source_suffix)

    def outputPath_derive(self, path: Path) -> Path:
        """
        Default output path for an input file: its suffix swapped for output_suffix.

        Example:
            >>> AppSettings().outputPath_derive(Path("site/page.lpml"))
            PosixPath('site/page.html')
        """
        name = path.name
        if name.endswith(self.source_suffix):
            name = name[: -len(self.source_suffix)]
        return path.with_name(name + self.output_suffix)


# Singleton instance - import this in your code
appsettings = AppSettings()
