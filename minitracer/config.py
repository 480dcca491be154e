"""
Configuration file loader.

Reads camera and render settings from YAML or JSON. Every key is
optional and falls back to the dataclass defaults.

Example config file:
```yaml
camera:
  vfov: 90
  near: 0.01
  far: 100
  world_up: [0, 1, 0]

render:
  width: 640
  height: 360
  light_position: [-5, 5, -5]
  background: 0
```
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Any, Tuple, Union
import json

import yaml

from .camera import CameraSettings
from .renderer import RenderSettings


class ConfigError(Exception):
    """Error while reading a configuration file."""
    pass


@dataclass(frozen=True)
class Config:
    """Settings for one tracer session."""
    camera: CameraSettings = field(default_factory=CameraSettings)
    render: RenderSettings = field(default_factory=RenderSettings)


def load_config(filepath: Union[str, Path]) -> Config:
    """Load a configuration file.

    Args:
        filepath: Path to a ``.json`` file, or YAML with any other suffix

    Returns:
        The parsed Config

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise ConfigError(f"Config file not found: {filepath}")

    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read {filepath}: {e}") from e

    try:
        if path.suffix == '.json':
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse {filepath}: {e}") from e

    return parse_config(data if data is not None else {})


def parse_config(data: Dict[str, Any]) -> Config:
    """Build a Config from a dictionary."""
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

    unknown = set(data) - {'camera', 'render'}
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    camera = _build(CameraSettings, data.get('camera') or {}, vectors=('world_up',))
    render = _build(RenderSettings, data.get('render') or {}, vectors=('light_position',))
    return Config(camera=camera, render=render)


def _build(cls, section: Dict[str, Any], vectors: Tuple[str, ...]):
    """Instantiate a settings dataclass from one config section."""
    if not isinstance(section, dict):
        raise ConfigError(f"{cls.__name__} section must be a mapping")

    known = {f.name for f in fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise ConfigError(f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")

    kwargs = dict(section)
    try:
        for name in vectors:
            if name in kwargs:
                kwargs[name] = _parse_vec3(kwargs[name])
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {cls.__name__}: {e}") from e


def _parse_vec3(data: Any) -> Tuple[float, float, float]:
    """Parse a 3-vector from a list or an x/y/z mapping."""
    if isinstance(data, (list, tuple)):
        if len(data) != 3:
            raise ConfigError(f"Vec3 must have 3 components, got {len(data)}")
        return float(data[0]), float(data[1]), float(data[2])
    elif isinstance(data, dict):
        return (
            float(data.get('x', 0)),
            float(data.get('y', 0)),
            float(data.get('z', 0))
        )
    else:
        raise ConfigError(f"Cannot parse Vec3 from: {data}")
