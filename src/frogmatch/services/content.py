from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from frogmatch.engine.deck import clamp_pair_count
from frogmatch.engine.types import (
    Color,
    ConfigError,
    DifficultyConfig,
    TokenSet,
    TokenType,
    get_difficulty,
)

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def parse_hex_color(raw: str) -> Color:
    value = raw.lstrip("#")
    if len(value) != 6:
        raise ContentError(f"Invalid colour {raw!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass(frozen=True)
class DifficultyCatalog:
    default: str
    options: dict[str, DifficultyConfig]

    def get(self, name: str | None = None) -> DifficultyConfig:
        return get_difficulty(name or self.default, self.options)


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> object:
        path = self._data_dir / f"{name}.json"
        raw = _load_json(path)
        schema = _load_json(self._schema_dir / f"{name}.schema.json")
        validate_json(raw, schema, context=str(path))
        return raw

    def load_tokens(self) -> TokenSet:
        raw = self._load_validated("tokens")
        if not isinstance(raw, dict):
            raise ContentError("tokens.json must be an object")
        raw_tokens = raw.get("tokens")
        if not isinstance(raw_tokens, list):
            raise ContentError("tokens.json.tokens must be a list")

        tokens: list[TokenType] = []
        seen: set[str] = set()
        for item in raw_tokens:
            if not isinstance(item, dict):
                continue
            token_type = _require_str(item, "type")
            if token_type in seen:
                raise ContentError(f"Duplicate token type: {token_type}")
            seen.add(token_type)
            tokens.append(
                TokenType(
                    type=token_type,
                    glyph=_require_str(item, "glyph"),
                    color=parse_hex_color(_require_str(item, "color")),
                )
            )
        return TokenSet(tokens=tuple(tokens))

    def load_difficulties(self, tokens: TokenSet | None = None) -> DifficultyCatalog:
        raw = self._load_validated("difficulties")
        if not isinstance(raw, dict):
            raise ContentError("difficulties.json must be an object")
        raw_map = raw.get("difficulties")
        if not isinstance(raw_map, dict):
            raise ContentError("difficulties.json.difficulties must be an object")

        options: dict[str, DifficultyConfig] = {}
        for name, cfg in raw_map.items():
            if not isinstance(name, str) or not isinstance(cfg, dict):
                continue
            pairs = _require_int(cfg, "pairs")
            if tokens is not None:
                pairs = clamp_pair_count(pairs, tokens)
            options[name] = DifficultyConfig(
                name=name,
                pair_count=pairs,
                grid_columns=_require_int(cfg, "grid_columns"),
            )

        logger.debug("Loaded %d difficulty options", len(options))
        default = _require_str(raw, "default")
        if default not in options:
            raise ConfigError(f"Default difficulty {default!r} is not defined")
        return DifficultyCatalog(default=default, options=options)

    def load_completion_schema(self) -> object:
        return _load_json(self._schema_dir / "completion_event.schema.json")

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        tokens = self.load_tokens()
        _ = self.load_difficulties(tokens)
        Draft202012Validator.check_schema(self.load_completion_schema())
