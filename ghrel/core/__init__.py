"""Core building blocks shared by every ghrel layer."""

from .config import Config, ConfigError, GitHubConfig, LabelPolicy, LabelsConfig, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    "Config",
    "ConfigError",
    "GitHubConfig",
    "LabelPolicy",
    "LabelsConfig",
    "load_config",
    "ErrorCode",
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
