import yaml
from typing import Dict, Any, Optional
from .models import MachineConfig, CompatMode

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def _parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        mode_name = str(data.get("mode", CompatMode.MODERN.value)).lower()
        try:
            mode = CompatMode(mode_name)
        except ValueError:
            raise ValueError(f"Unsupported compatibility mode: {mode_name}")

        quirks = data.get("quirks") or {}
        if not isinstance(quirks, dict):
            raise ValueError(f"Invalid quirks section: {quirks!r}")

        # Parse quirk overrides (display size is an integer, the rest are flags)
        overrides: Dict[str, Any] = {}
        for name, value in quirks.items():
            if name in ("display_width", "display_height"):
                overrides[name] = self._parse_int(value)
            else:
                overrides[name] = self._parse_bool(value)

        return MachineConfig(
            mode=mode,
            quirk_overrides=overrides,
            rng_seed=self._parse_optional_int(data.get("rng_seed"))
        )

    def _parse_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        raise ValueError(f"Invalid boolean format: {value}")

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
