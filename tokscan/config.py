from __future__ import annotations

import os
import codecs

from collections import ChainMap
from typing import Any, Callable, Iterable, Optional, Iterator
from os import PathLike

from .errors import ConfigError
from .numbers import INT_BITS, INT_WIDTHS


class Enum:
    """Variants enumeration.

    Used to define variants for the option.
    """

    def __init__(self, *variants: str | int | bool | None):
        self.variants = variants

    def match(self, value: Any) -> bool:
        return value in self.variants

    def convert(self, value: str) -> Any:
        for variant in self.variants:
            if str(variant) == value:
                return variant
        raise ValueError(f"expected one of {self}, got {value!r}")

    def __repr__(self):
        variants = ', '.join(repr(v) for v in self.variants)
        return f"Enum({variants})"

    def __str__(self):
        variants = ' | '.join(str(v) for v in self.variants)
        return f"({variants})"


class Escaped(str):
    """String option written with backslash escapes, like `\\r\\n`."""

    @classmethod
    def decode(cls, value: str) -> Escaped:
        try:
            raw = value.encode("latin-1", "backslashreplace")
            return cls(codecs.decode(raw, "unicode_escape"))
        except UnicodeError as e:
            raise ValueError(f"invalid escape sequence in {value!r}") from e


class Option:
    """Config option.

    Used to define the schema. Immutable.

    Parameters:
        type: Option's type.
        required: If the option is required. If the option is required and
                  not assigned, an error will be raised.
        override: Option can be assigned only once.
        default: Option's default value.
    """

    default: Any
    required: bool
    override: bool
    type: type | Enum

    def __init__(self,
                 type,
                 default=None,
                 required=False,
                 override=True):
        super().__setattr__('default', default)
        super().__setattr__('required', required)
        super().__setattr__('type', type)
        super().__setattr__('override', override)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"option is immutable: {name!r}")

    def __delattr__(self, name: str):
        raise AttributeError(f"option is immutable: {name!r}")

    def __repr__(self):
        tp = self.type.__name__ if type(self.type) is type else self.type
        attrs = ('default', 'required', 'override')
        kwargs = ', '.join(f"{attr}={getattr(self, attr)!r}" for attr in attrs)
        return f"Option({tp}, {kwargs})"


def _to_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise ValueError(f"expected boolean, got {value!r}")


class Config:
    def __init__(self, schema: dict[str, Option], strict=True):
        """Initialize Config instance.

        Args:
            schema: Schema mapping.
            strict: If true, adding options that are not in schema
                    is not allowed.
        """
        self._config = ChainMap(schema)
        self._types: dict[type, Callable[[str], Any]] = {}

        register = self.register_type
        register(int, int)
        register(bool, _to_bool)
        register(str, str)
        register(Escaped, Escaped.decode)

        self.strict = strict

    @property
    def schema(self) -> dict[str, Option]:
        """Return the schema mapping."""
        return self._config.maps[-1]

    def register_type(self, type_: type, convert_fn: Callable[[str], Any]):
        """Add the new type handler."""
        self._types[type_] = convert_fn

    def override(self, options: dict[str, Any]):
        """Assign options to config.

        Each call to `override` adds new option values on the top
        of old values.

        Raises:
            ConfigError
        """
        self._try_insert_map(self._override, options)

    def parse(self, it: Iterable[str]):
        """Parse and override options.

        Option string has the format `<option_name>=<value>`.

        Raises:
            ConfigError
        """
        self._try_insert_map(self._parse, it)

    def validate(self) -> None:
        """Find options that are required but not assigned.

        Raises:
            ConfigError
        """
        required_options = [name for name, value in self._config.items()
                            if isinstance(value, Option) and value.required]

        if required_options:
            opts = ', '.join(repr(n) for n in required_options)
            raise ConfigError(f"required options: {opts}")

    def _try_insert_map(self, fn: Callable, *args: Any):
        self._config.maps.insert(0, {})
        try:
            fn(*args)
        except Exception:
            self._config.maps.pop(0)
            raise

    def _override(self, options: dict[str, Any], convert=False):
        schema = self.schema

        for name, value in options.items():
            if name not in schema:
                if self.strict:
                    msg = f"cannot add name {name!r} that is not in config"
                    raise ConfigError(msg)
                self._config[name] = value
                continue

            option = self._get_option(name)
            if convert:
                value = self._convert(name, value, option)
            self._check_value(name, value, option)
            self._config[name] = value

    def _convert(self, name: str, value: str, option: Option) -> Any:
        tp = option.type
        if isinstance(tp, Enum):
            convert_fn = tp.convert
        else:
            convert_fn = self._types.get(tp)
            if convert_fn is None:
                raise ConfigError(f"option {name!r}: no converter for {tp}")
        try:
            return convert_fn(value)
        except ValueError as e:
            raise ConfigError(f"option {name!r}: {e}") from e

    def _check_value(self, name: str, value: Any, option: Option):
        tp = option.type

        if isinstance(tp, Enum):
            if not tp.match(value):
                raise ConfigError(
                    f"option {name!r} must be one of the following: {tp}, "
                    f"got {value!r}")
            return

        expected = str if tp is Escaped else tp
        # bool is an int subclass
        if (not isinstance(value, expected)
                or tp is int and isinstance(value, bool)):
            raise ConfigError(
                f"option {name!r} must be of type {tp.__name__}, "
                f"got {type(value).__name__}: {value!r}")

    def _parse(self, it: Iterable[str]):
        dct: dict[str, str] = {}

        for s in it:
            name, sep, value = s.partition('=')
            if not sep:
                raise ConfigError(f"expected <name>=<value>, got {s!r}")
            dct[name.strip()] = value

        self._override(dct, convert=True)

    def _get_option(self, name: str) -> Option:
        option = self.schema[name]
        assigned = any(name in m for m in self._config.maps[1:-1])
        if assigned and not option.override:
            raise ConfigError(f"option {name!r} can be assigned only once")
        return option

    def items(self) -> Iterator[tuple[str, Any]]:
        for name, value in self._config.items():
            if isinstance(value, Option):
                value = value.default
            yield name, value

    def clear(self):
        """Remove assigned options, preserving the schema.

        After calling this method, `Config.layers` returns 0.
        """
        self._config.maps = self._config.maps[-1:]

    @property
    def layers(self) -> int:
        """Total number of override layers."""
        return len(self._config.maps) - 1

    def pop_layer(self) -> Optional[dict[str, Any]]:
        """Remove the latest override layer, if exists."""
        if len(self._config.maps) == 1:
            return None
        return self._config.maps.pop(0)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)
        if name in self._config:
            value = self._config[name]
            if isinstance(value, Option):
                return value.default
            return value

        raise AttributeError(f"no such config value: {name!r}")

    def __getitem__(self, name: str) -> Any:
        return getattr(self, name)

    def __contains__(self, name: str) -> bool:
        return name in self._config

    def __iter__(self) -> Iterator[str]:
        yield from self._config

    def __repr__(self):
        lines = ["Config({"]
        for name, val in self.items():
            lines.append(f"  {name!r}: {val!r},")
        lines.append("})")
        return '\n'.join(lines)


SCANNER_OPTIONS: dict[str, Option] = {
    "separators": Option(Enum("whitespace", "ascii"), default="whitespace"),
    "delimiters": Option(str, default=""),
    "line_separator": Option(Escaped, default=Escaped(os.linesep)),
    "int_bits": Option(Enum(*INT_WIDTHS), default=INT_BITS),
    "bufsize": Option(int, default=4096),
    "encoding": Option(str, default="utf-8"),
}


def scanner_config() -> Config:
    return Config(SCANNER_OPTIONS)


def read_file(schema: dict[str, Option], filename: str | PathLike[str]):
    """Create Config object from configuration file.

    The file is a Python script; its top-level names that are in the
    schema are options, other names are ignored.
    """
    namespace = eval_config_file(filename)

    options = {attr: val for attr, val in namespace.items()
               if attr in schema}

    cfg = Config(schema)
    cfg.override(options)
    cfg.validate()

    return cfg


def eval_config_file(filename: str | PathLike[str]) -> dict[str, Any]:
    namespace: dict[str, Any] = {}

    try:
        with open(filename, 'rb') as fin:
            code = compile(fin.read(), filename, 'exec')
            exec(code, namespace)
    except SyntaxError as e:
        raise ConfigError(f'syntax error in the config file: {e}') from e
    except SystemExit as e:
        raise ConfigError('the configuration file called sys.exit()') from e
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f'an exception in the config file: {e}') from e

    return namespace
