"""
Configuration loading and option layering.

A run's options come from three layers, highest precedence first:
CLI flags, the config file, and the DEFAULTS table.
"""

import io
import json
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml
from dotenv import dotenv_values

from .capture_config import DEFAULT_CONFIG_FILE, DEFAULTS, CaptureOptions
from .errors import ConfigNotFound, ConfigParseError
from .resolvers import (
    ensure_number,
    resolve_boolean,
    resolve_follow_iframe_mode,
    to_selector_list,
)


# Config-file key (snake_case form) -> CaptureOptions field
CONFIG_KEYS = {
    'input': 'input',
    'output': 'output',
    'width': 'viewport_width',
    'height': 'viewport_height',
    'wait': 'wait_after_load',
    'timeout': 'navigation_timeout',
    'follow_iframe': 'follow_iframe',
    'iframe_selector': 'iframe_selector',
    'iframe_index': 'iframe_index',
    'hide_selectors': 'hide_selectors',
    'remove_selectors': 'remove_selectors',
    'no_sandbox': 'no_sandbox',
    'scale': 'device_scale_factor',
    'device_scale_factor': 'device_scale_factor',
    'headless': 'headless',
    'keep_going': 'keep_going',
    'progress': 'progress',
}


@dataclass
class LoadedConfig:
    path: Path
    values: dict = field(default_factory=dict)
    found: bool = False


def _snake_key(key: str) -> str:
    """followIframe / follow-iframe / FOLLOW_IFRAME -> follow_iframe."""
    key = re.sub(r'(?<=[a-z0-9])([A-Z])', r'_\1', key)
    return key.replace('-', '_').lower()


def parse_config_content(path: Path, content: str) -> dict:
    """Parse config text using the format implied by the file extension."""
    ext = path.suffix.lower()
    if not content.strip():
        return {}

    try:
        if ext == '.toml':
            data = tomllib.loads(content)
        elif ext == '.env':
            data = dict(dotenv_values(stream=io.StringIO(content)))
        elif ext in ('.yaml', '.yml'):
            data = yaml.safe_load(content)
        elif ext in ('.json', ''):
            data = json.loads(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError as exc:
                raise ConfigParseError(
                    path, f"unsupported config format {ext}, and not valid JSON: {exc}"
                ) from exc
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigParseError(path, str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(path, f"expected a table of options, got {type(data).__name__}")
    return data


def load_config(config_path: str | None = None, default_path: str = DEFAULT_CONFIG_FILE) -> LoadedConfig:
    """
    Load the config file.

    An explicitly requested file must exist. When no path is given, a missing
    default file yields an empty config. Keys starting with '_' are dropped.

    Args:
        config_path: Path passed via --config, if any
        default_path: File to look for when config_path is None

    Returns:
        LoadedConfig with the resolved path and raw values
    """
    resolved = Path(config_path or default_path).resolve()
    try:
        content = resolved.read_text(encoding='utf-8')
    except FileNotFoundError:
        if config_path:
            raise ConfigNotFound(resolved) from None
        return LoadedConfig(path=resolved)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(resolved, str(exc)) from exc

    parsed = parse_config_content(resolved, content)
    values = {k: v for k, v in parsed.items() if not str(k).startswith('_')}
    return LoadedConfig(path=resolved, values=values, found=True)


def config_to_layer(values: Mapping[str, Any]) -> dict:
    """Map raw config keys onto CaptureOptions field names, dropping unknown keys."""
    layer = {}
    for key, value in values.items():
        field_name = CONFIG_KEYS.get(_snake_key(str(key)))
        if field_name:
            layer[field_name] = value
    return layer


def _text(value):
    if isinstance(value, bool) or value is None:
        return None
    text = str(value).strip()
    return text or None


def _int_at_least(minimum: int) -> Callable:
    def parse(value):
        number = ensure_number(value, None)
        if number is None or number < minimum:
            return None
        return number
    return parse


def _selectors(value):
    return tuple(to_selector_list(value))


def _flag(value):
    return resolve_boolean(value, None)


# One normalizer per field. Returning None sends resolution to the next layer.
FIELD_PARSERS: dict[str, Callable] = {
    'input': _text,
    'output': _text,
    'viewport_width': _int_at_least(1),
    'viewport_height': _int_at_least(1),
    'device_scale_factor': _int_at_least(1),
    'wait_after_load': _int_at_least(0),
    'navigation_timeout': _int_at_least(1),
    'follow_iframe': resolve_follow_iframe_mode,
    'iframe_selector': _text,
    'iframe_index': _int_at_least(0),
    'hide_selectors': _selectors,
    'remove_selectors': _selectors,
    'no_sandbox': _flag,
    'headless': _flag,
    'keep_going': _flag,
    'progress': _flag,
}


def resolve_options(
    cli: Mapping[str, Any],
    file: Mapping[str, Any],
    defaults: Mapping[str, Any] = DEFAULTS,
) -> CaptureOptions:
    """
    Merge three option layers into one CaptureOptions.

    Precedence is CLI > file > defaults. A value that is missing, None, or
    fails to normalize falls through to the next layer.
    """
    resolved = {}
    for name, parse in FIELD_PARSERS.items():
        for layer in (cli, file, defaults):
            raw = layer.get(name)
            if raw is None:
                continue
            value = parse(raw)
            if value is not None:
                resolved[name] = value
                break
    return CaptureOptions(**resolved)


def build_options(
    cli: Mapping[str, Any],
    config_path: str | None = None,
    defaults: Mapping[str, Any] = DEFAULTS,
    default_config_file: str = DEFAULT_CONFIG_FILE,
) -> CaptureOptions:
    """Load the config file and resolve it against CLI values and defaults."""
    loaded = load_config(config_path, default_path=default_config_file)
    return resolve_options(cli, config_to_layer(loaded.values), defaults)
