import os
from dataclasses import dataclass

from .conversion.options import DEFAULT_VL_VERSION, normalize_vl_version

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    workers: int = 4
    vl_version: str = DEFAULT_VL_VERSION
    lenient_vl_version: bool = False
    max_spec_kb: int = 5120
    log_json: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment.

        Raises ValueError on a non-numeric count or an unsupported
        CHART_SERVICE_VL_VERSION.
        """
        raw_version = os.getenv("CHART_SERVICE_VL_VERSION", DEFAULT_VL_VERSION)
        vl_version = normalize_vl_version(raw_version)
        if vl_version is None:
            raise ValueError(f"unsupported CHART_SERVICE_VL_VERSION: {raw_version}")
        return cls(
            workers=int(os.getenv("CHART_SERVICE_WORKERS", "4")),
            vl_version=vl_version,
            lenient_vl_version=env_flag("CHART_SERVICE_LENIENT_VL_VERSION"),
            max_spec_kb=int(os.getenv("MAX_SPEC_KB", "5120")),
            log_json=env_flag("CHART_SERVICE_LOG_JSON"),
            log_level=os.getenv("CHART_SERVICE_LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8080")),
            # Enable reload in dev unless explicitly disabled
            reload=env_flag("RELOAD", "true"),
        )
