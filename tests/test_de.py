"""Tests for serini.de."""

from dataclasses import dataclass, field
from typing import Optional

import pytest

from serini import (
    U16,
    IniParser,
    IniSyntaxError,
    InvalidValue,
    MissingRequiredField,
    UnsupportedFeature,
    from_document,
    from_str,
    ini_field,
)


@dataclass
class Database:
    host: str
    port: int
    username: str
    password: Optional[str]


@dataclass
class Cache:
    ttl: int
    max_size: Optional[int]


@dataclass
class Config:
    name: str
    port: int
    enabled: bool
    description: Optional[str]
    database: Database
    cache: Cache


@dataclass
class Profile:
    speed: float
    anime: "Profile | None" = None
    movie: "Profile | None" = None


@dataclass
class Foo:
    foo: int


@dataclass
class Player:
    speed: float = 1.0
    volume: int = 50
    anime: "Optional[Player]" = None


NESTED = """
    name = My App
    port = 8080
    enabled = true
    description = A test application

    [database]
    host = localhost
    port = 5432
    username = admin

    [cache]
    ttl = 300
    max_size = 1000000
    """


def test_nested():
    config = from_str(NESTED, Config)
    assert config.name == "My App"
    assert config.port == 8080
    assert config.enabled is True
    assert config.description == "A test application"
    assert config.database == Database("localhost", 5432, "admin", None)
    assert config.cache == Cache(300, 1000000)


def test_profiles_override():
    config = from_str("speed = 1\n\n[anime]\nspeed = 1.5\n\n[movie]\nspeed = 2\n", Profile)
    assert config.speed == 1.0
    assert isinstance(config.speed, float)
    assert config.anime.speed == 1.5
    assert config.movie.speed == 2.0
    assert config.anime.anime is None
    assert config.anime.movie is None
    assert config.movie.anime is None
    assert config.movie.movie is None


def test_profile_does_not_inherit_root_values():
    config = from_str("speed = 1.25\nvolume = 80\n[anime]\nspeed = 1.5\n", Player)
    assert config.volume == 80
    assert config.anime == Player(speed=1.5, volume=50, anime=None)


def test_unknown_key_tolerated():
    assert from_str("foo = 1\nbar = 2", Foo) == Foo(foo=1)


def test_unmatched_section_ignored():
    assert from_str("foo = 1\n[extra]\nfoo = oops\n", Foo) == Foo(foo=1)


def test_section_for_scalar_field_ignored():
    assert from_str("foo = 1\n[foo]\nx = 2\n", Foo) == Foo(foo=1)


def test_key_for_record_field_ignored():
    assert from_str("speed = 1\nanime = 2\n", Profile) == Profile(1.0)


def test_rename():
    @dataclass
    class App:
        app_name: str = ini_field(rename="app-name")

    assert from_str("app-name = X\n", App) == App("X")
    with pytest.raises(MissingRequiredField) as excinfo:
        from_str("app_name = X\n", App)
    assert excinfo.value.key == "app-name"


def test_keys_case_sensitive():
    with pytest.raises(MissingRequiredField):
        from_str("FOO = 1\n", Foo)


def test_unescape_only_text():
    @dataclass
    class Note:
        text: str
        count: int

    assert from_str(r"text = a\;b" + "\ncount = 2\n", Note) == Note("a;b", 2)
    with pytest.raises(InvalidValue):
        from_str("text = x\ncount = 2\\;\n", Note)


def test_bad_escape_reports_line():
    @dataclass
    class Note:
        text: str

    with pytest.raises(IniSyntaxError) as excinfo:
        from_str("\n\ntext = C:\\path\\q\n", Note)
    assert excinfo.value.line == 3


def test_invalid_value():
    with pytest.raises(InvalidValue) as excinfo:
        from_str("foo = not_a_number\n", Foo)
    assert excinfo.value.typ == "int"
    assert excinfo.value.value == "not_a_number"


def test_width_overflow():
    @dataclass
    class Server:
        port: U16

    assert from_str("port = 65535\n", Server) == Server(65535)
    with pytest.raises(InvalidValue) as excinfo:
        from_str("port = 65536\n", Server)
    assert excinfo.value.typ == "u16"


def test_invalid_bool():
    @dataclass
    class Flags:
        enabled: bool

    with pytest.raises(InvalidValue) as excinfo:
        from_str("enabled = yes\n", Flags)
    assert excinfo.value.typ == "bool"


def test_missing_required_scalar():
    with pytest.raises(MissingRequiredField) as excinfo:
        from_str("bar = 1\n", Foo)
    assert excinfo.value.key == "foo"


def test_missing_required_scalar_in_section():
    text = NESTED.replace("    ttl = 300\n", "")
    with pytest.raises(MissingRequiredField) as excinfo:
        from_str(text, Config)
    assert excinfo.value.key == "ttl"
    assert excinfo.value.section == "cache"


def test_missing_required_record():
    text = NESTED.split("[cache]")[0]
    with pytest.raises(MissingRequiredField) as excinfo:
        from_str(text, Config)
    assert excinfo.value.key == "cache"


def test_missing_record_with_default():
    @dataclass
    class Outer:
        cache: Cache = field(default_factory=lambda: Cache(60, None))

    assert from_str("", Outer) == Outer(Cache(60, None))


def test_defaults_fill_missing_fields():
    @dataclass
    class Settings:
        level: int = 3
        label: Optional[str] = "default"

    assert from_str("", Settings) == Settings(3, "default")


def test_commented_assignment_is_absent():
    @dataclass
    class Flags:
        debug: Optional[int]

    assert from_str("; debug = \n", Flags) == Flags(None)


def test_empty_text_value_is_present():
    @dataclass
    class Flags:
        label: Optional[str]

    assert from_str("label = \n", Flags) == Flags("")


def test_duplicate_key_last_wins():
    with pytest.warns(UserWarning):
        assert from_str("foo = 1\nfoo = 2\n", Foo) == Foo(2)


def test_syntax_error():
    with pytest.raises(IniSyntaxError) as excinfo:
        from_str("foo = 1\nfoo 2\n", Foo)
    assert excinfo.value.line == 2
    assert excinfo.value.content == "foo 2"


def test_required_record_inside_section():
    @dataclass
    class Inner:
        cache: Cache

    @dataclass
    class Outer:
        inner: Inner

    with pytest.raises(UnsupportedFeature) as excinfo:
        from_str("[inner]\nx = 1\n", Outer)
    assert excinfo.value.feature == "nested sections"


def test_sequence_schema_rejected():
    @dataclass
    class Tags:
        tags: list[str]

    with pytest.raises(UnsupportedFeature) as excinfo:
        from_str("tags = a\n", Tags)
    assert excinfo.value.feature == "sequence"


def test_from_document():
    doc = IniParser.loads("foo = 7\n")
    assert from_document(doc, Foo) == Foo(7)


def test_too_many_digits():
    with pytest.raises(InvalidValue) as excinfo:
        from_str("foo = " + "9" * 5000 + "\n", Foo)
    assert excinfo.value.typ == "int"
