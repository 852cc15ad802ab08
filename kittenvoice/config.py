"""Configuration model and loaders for kittenvoice.

Responsibilities:
- Define model asset locations and speaker defaults as a typed dataclass.
- Load `config.yaml` / `config.json` from an assets directory with strict key validation.
- Apply environment overrides with deterministic precedence.

Key types:
- `ModelConfig`: resolved asset paths, aliases, overrides and speaker defaults.
- `ConfigLoader`: static construction helpers for `ModelConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import SynthesisTimingOptions
from .parsing import (
    normalize_optional_string,
    parse_non_negative_float,
    parse_permissive_boolean,
    parse_positive_int,
)


DEFAULT_VOICE = "Bella"
DEFAULT_SPEED = 1.3
DEFAULT_EXPRESSIVENESS = 1.0
DEFAULT_MAX_INPUT_TOKENS = 500
SAMPLE_RATE = 24000
DEFAULT_CMU_DICT_FILE = "cmudict.dict"
DEFAULT_TOKENIZER_FILE = "tokenizer.json"
CONFIG_FILE_NAMES = ("config.yaml", "config.yml", "config.json")


@dataclass(frozen=True, slots=True)
class ModelConfig:
    """Model assets and speaker defaults.

    Attributes:
        model_path: ONNX acoustic model file.
        voices_path: `.npz` archive of per-voice style matrices.
        cmu_dict_path: CMU pronouncing dictionary; a missing file disables lexicon lookups.
        tokenizer_path: `tokenizer.json` holding the symbol vocabulary.
        voice_aliases: Friendly voice names mapped to archive voice names.
        pronunciation_overrides: Word -> ARPAbet transcriptions.
        voice: Default voice name.
        speed: Default speaking rate.
        expressiveness: Global emotion intensity multiplier (0 disables emotion).
        max_input_tokens: Largest token sequence sent to the model in one request.
        sample_rate: Output sample rate of the model.
        timing: Pause and inflection timing.
    """

    model_path: Path
    voices_path: Path
    cmu_dict_path: Path
    tokenizer_path: Path
    voice_aliases: dict[str, str] = field(default_factory=dict)
    pronunciation_overrides: dict[str, str] = field(default_factory=dict)
    voice: str = DEFAULT_VOICE
    speed: float = DEFAULT_SPEED
    expressiveness: float = DEFAULT_EXPRESSIVENESS
    max_input_tokens: int = DEFAULT_MAX_INPUT_TOKENS
    sample_rate: int = SAMPLE_RATE
    timing: SynthesisTimingOptions = field(default_factory=SynthesisTimingOptions)


class ConfigLoader:
    """Factory methods for creating `ModelConfig` from external sources."""

    _REQUIRED_KEYS = frozenset({"model_file", "voices"})
    _SUPPORTED_KEYS = frozenset(
        {
            "model_file",
            "voices",
            "cmu_dict_file",
            "tokenizer_file",
            "voice_aliases",
            "pronunciation_overrides",
            "voice",
            "speed",
            "expressiveness",
            "max_input_tokens",
            "timing",
        }
    )
    _ENV_VOICE = "KITTENVOICE_VOICE"
    _ENV_SPEED = "KITTENVOICE_SPEED"
    _ENV_EXPRESSIVENESS = "KITTENVOICE_EXPRESSIVENESS"

    @staticmethod
    def find_config_file(assets_dir: Path) -> Path:
        """Return the first config file present in `assets_dir`.

        Raises:
            FileNotFoundError: If no supported config file exists.
        """

        for name in CONFIG_FILE_NAMES:
            candidate = assets_dir / name
            if candidate.is_file():
                return candidate
        expected = ", ".join(CONFIG_FILE_NAMES)
        raise FileNotFoundError(f"No config file ({expected}) found in `{assets_dir}`.")

    @staticmethod
    def from_assets_dir(assets_dir: Path) -> ModelConfig:
        """Create a validated config from the config file inside `assets_dir`."""

        path = ConfigLoader.find_config_file(assets_dir)
        payload = ConfigLoader._parse_payload(path.read_text(encoding="utf-8"), path)
        return ConfigLoader.from_mapping(payload, assets_dir, source_label=f"config `{path}`")

    @staticmethod
    def from_mapping(
        payload: Mapping[str, Any],
        assets_dir: Path,
        source_label: str = "config",
    ) -> ModelConfig:
        """Build a validated config; relative file names resolve against `assets_dir`."""

        ConfigLoader._validate_keys(payload, source_label)

        model_file = ConfigLoader._required_string(payload, "model_file", source_label)
        voices_file = ConfigLoader._required_string(payload, "voices", source_label)
        cmu_dict_file = (
            ConfigLoader._optional_non_empty_string(payload, "cmu_dict_file")
            or DEFAULT_CMU_DICT_FILE
        )
        tokenizer_file = (
            ConfigLoader._optional_non_empty_string(payload, "tokenizer_file")
            or DEFAULT_TOKENIZER_FILE
        )

        return ModelConfig(
            model_path=assets_dir / model_file,
            voices_path=assets_dir / voices_file,
            cmu_dict_path=assets_dir / cmu_dict_file,
            tokenizer_path=assets_dir / tokenizer_file,
            voice_aliases=ConfigLoader._optional_string_map(
                payload, "voice_aliases", source_label, skip_blank_values=False
            ),
            pronunciation_overrides=ConfigLoader._optional_string_map(
                payload, "pronunciation_overrides", source_label, skip_blank_values=True
            ),
            voice=ConfigLoader._optional_non_empty_string(payload, "voice") or DEFAULT_VOICE,
            speed=ConfigLoader._optional_speed(payload),
            expressiveness=ConfigLoader._optional_float(
                payload, "expressiveness", DEFAULT_EXPRESSIVENESS
            ),
            max_input_tokens=ConfigLoader._optional_positive_int(
                payload, "max_input_tokens", DEFAULT_MAX_INPUT_TOKENS
            ),
            timing=ConfigLoader._optional_timing(payload, source_label),
        )

    @staticmethod
    def apply_env(config: ModelConfig, env: Mapping[str, str] | None = None) -> ModelConfig:
        """Return `config` with `KITTENVOICE_*` environment overrides applied."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        updates: dict[str, Any] = {}

        voice = normalize_optional_string(env_map.get(ConfigLoader._ENV_VOICE))
        if voice is not None:
            updates["voice"] = voice

        speed = normalize_optional_string(env_map.get(ConfigLoader._ENV_SPEED))
        if speed is not None:
            updates["speed"] = parse_positive_speed(speed, ConfigLoader._ENV_SPEED)

        expressiveness = normalize_optional_string(env_map.get(ConfigLoader._ENV_EXPRESSIVENESS))
        if expressiveness is not None:
            updates["expressiveness"] = parse_non_negative_float(
                expressiveness, ConfigLoader._ENV_EXPRESSIVENESS
            )

        return replace(config, **updates) if updates else config

    @staticmethod
    def _parse_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML (or JSON, which YAML accepts) and enforce a mapping root."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config `{path}` is not valid YAML/JSON: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"Config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _validate_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required keys."""

        unknown = sorted(str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(key for key in ConfigLoader._REQUIRED_KEYS if key not in payload)
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _required_string(payload: Mapping[str, Any], key: str, source_label: str) -> str:
        value = ConfigLoader._optional_non_empty_string(payload, key)
        if value is None:
            raise ValueError(f"{source_label} requires non-empty `{key}`.")
        return value

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_speed(payload: Mapping[str, Any]) -> float:
        if "speed" not in payload:
            return DEFAULT_SPEED
        return parse_positive_speed(payload["speed"], "speed")

    @staticmethod
    def _optional_float(
        payload: Mapping[str, Any], key: str, default: float
    ) -> float:
        if key not in payload:
            return default
        return parse_non_negative_float(payload[key], key)

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, default: int
    ) -> int:
        if key not in payload:
            return default
        return parse_positive_int(payload[key], key)

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any],
        key: str,
        source_label: str,
        *,
        skip_blank_values: bool,
    ) -> dict[str, str]:
        """Read an optional mapping with non-empty string keys and values."""

        raw = payload.get(key)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_value in raw.items():
            key_value = normalize_optional_string(raw_key)
            value_value = normalize_optional_string(raw_value)
            if key_value is None or value_value is None:
                if skip_blank_values:
                    continue
                raise ValueError(f"{source_label} field `{key}` contains a blank key or value.")
            normalized[key_value] = value_value
        return normalized

    @staticmethod
    def _optional_timing(payload: Mapping[str, Any], source_label: str) -> SynthesisTimingOptions:
        """Read the `timing` mapping into `SynthesisTimingOptions`."""

        raw = payload.get("timing")
        if raw is None:
            return SynthesisTimingOptions()
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `timing` must be a mapping/object.")

        supported = SynthesisTimingOptions.field_names()
        unknown = sorted(str(name) for name in raw if name not in supported)
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} field `timing` includes unsupported key(s): {key_list}.")

        values: dict[str, Any] = {}
        for name, raw_value in raw.items():
            label = f"timing.{name}"
            if name == "inflection_enabled":
                parsed = parse_permissive_boolean(raw_value)
                if parsed is None:
                    raise ValueError(
                        f"{source_label} field `{label}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
                    )
                values[name] = parsed
            else:
                values[name] = parse_non_negative_float(raw_value, label)
        return SynthesisTimingOptions(**values)


def parse_positive_speed(value: object, field_name: str) -> float:
    """Parse a speaking rate, which must be strictly positive."""

    parsed = parse_non_negative_float(value, field_name)
    if parsed <= 0:
        raise ValueError(f"`{field_name}` must be greater than zero.")
    return parsed
