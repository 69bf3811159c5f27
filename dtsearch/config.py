import os
from dataclasses import dataclass
from dotenv import load_dotenv

from dtsearch.exceptions import ConfigError

load_dotenv()

# Mutually exclusive ways of narrowing the search by where the types come from.
TYPE_FILTER_FLAGS = ("untyped", "dt", "bundled")


@dataclass
class Settings:
    app_id: str
    api_key: str
    index_name: str
    default_num: int

    def require_credentials(self):
        missing = [name for name, value in (
            ("DTSEARCH_APP_ID", self.app_id),
            ("DTSEARCH_API_KEY", self.api_key),
        ) if not value]
        if missing:
            raise ConfigError(f"Missing search credentials: set {', '.join(missing)} in the environment or .env")


def load_settings():
    raw_num = os.getenv("DTSEARCH_NUM", "10")
    try:
        default_num = int(raw_num)
    except ValueError:
        raise ConfigError(f"DTSEARCH_NUM must be an integer, got {raw_num!r}") from None
    return Settings(
        app_id=os.getenv("DTSEARCH_APP_ID", ""),
        api_key=os.getenv("DTSEARCH_API_KEY", ""),
        index_name=os.getenv("DTSEARCH_INDEX", "npm-search"),
        default_num=default_num,
    )


@dataclass
class RunOptions:
    """Flags for a single search, as given on the command line."""
    npm: bool = False
    yarn: bool = False
    exact: bool = False
    repo: bool = False
    debug: bool = False
    bundled: bool = False
    dt: bool = False
    untyped: bool = False

    @property
    def install_requested(self) -> bool:
        return self.npm or self.yarn

    def validate(self):
        chosen = [flag for flag in TYPE_FILTER_FLAGS if getattr(self, flag)]
        if len(chosen) > 1:
            allowed = ", ".join(f"--{flag}" for flag in TYPE_FILTER_FLAGS)
            given = " and ".join(f"--{flag}" for flag in chosen)
            raise ConfigError(f"May only specify one of {allowed} (got {given})")

    @property
    def type_filter(self) -> str:
        """The chosen filter flag, or "default". Call validate() first."""
        for flag in TYPE_FILTER_FLAGS:
            if getattr(self, flag):
                return flag
        return "default"
