"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use ASSETREV_ prefix (e.g., ASSETREV_STRICT_BLOCKS=true).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use ASSETREV_ prefix.

    Examples:
        ASSETREV_DEFAULT_PATTERN=css
        ASSETREV_STRICT_BLOCKS=true
        ASSETREV_MANIFEST_FILE=assets-manifest.yaml
        ASSETREV_HTML_EXTENSIONS='[".html", ".htm", ".xhtml"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="ASSETREV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Pattern configuration
    default_pattern: str = Field(
        default="html",
        description="Pattern preset used when none is requested and the file extension is unknown",
    )

    html_extensions: List[str] = Field(
        default=[".html", ".htm"],
        description="File extensions processed with the html preset",
    )

    css_extensions: List[str] = Field(
        default=[".css"],
        description="File extensions processed with the css preset",
    )

    # Failure policy
    strict_blocks: bool = Field(
        default=False,
        description="Raise when a block's raw text is missing instead of skipping it",
    )

    strict_assets: bool = Field(
        default=False,
        description="Raise when a reference has no revved version instead of leaving it untouched",
    )

    # I/O configuration
    manifest_file: str = Field(
        default="rev-manifest.json",
        description="Rev manifest filename, relative to the input directory",
    )

    input_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read and write documents",
    )

    def preset_forFile(self, path: Union[str, Path]) -> Optional[str]:
        """
        Pick the pattern preset for a file from its extension.

        Args:
            path: Document filename or path

        Returns:
            "html", "css", or None if the extension is not configured

        Example:
            >>> settings = AppSettings()
            >>> settings.preset_forFile("site/index.HTML")
            'html'
            >>> settings.preset_forFile("logo.png") is None
            True
        """
        suffix = Path(path).suffix.lower()
        if suffix in (ext.lower() for ext in self.html_extensions):
            return "html"
        if suffix in (ext.lower() for ext in self.css_extensions):
            return "css"
        return None


# Singleton instance - import this in your code
appsettings = AppSettings()
