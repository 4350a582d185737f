#
# DWARN - Options Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses

# Third party ----------------------------------------------------------------------------------------------------------
import pytest
import toml
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from dwarn.kinds import Kind
from dwarn.options import DumpOptions, load_options


# Local Classes & Methods ----------------------------------------------------------------------------------------------

def hash_number(dumper, depth, value):
    return f"#{value}"


# Tests ----------------------------------------------------------------------------------------------------------------

class TestDumpOptions:
    def test_defaults(self):
        opts = DumpOptions()
        assert opts.max_length is None
        assert opts.max_elements == 6
        assert opts.max_depth == 2
        assert opts.stringify_objects is False
        assert opts.pairs_detection is False
        assert opts.ellipsis == "..."
        assert opts.formatters == frozendict()

    def test_frozen(self):
        opts = DumpOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            opts.max_depth = 5

    def test_hashable_and_equal(self):
        assert DumpOptions(max_depth=3) == DumpOptions(max_depth=3)
        assert hash(DumpOptions(max_depth=3)) == hash(DumpOptions(max_depth=3))

    @pytest.mark.parametrize(
        "kwargs",
        [
            pytest.param({"max_elements": 1}, id="min-elements"),
            pytest.param({"max_depth": 0}, id="zero-depth"),
            pytest.param({"max_length": 1}, id="min-length"),
            pytest.param({"max_length": None}, id="no-length"),
        ],
    )
    def test_valid_limits(self, kwargs):
        DumpOptions(**kwargs)

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            pytest.param({"max_elements": 0}, ValueError, id="zero-elements"),
            pytest.param({"max_elements": -1}, ValueError, id="negative-elements"),
            pytest.param({"max_depth": -1}, ValueError, id="negative-depth"),
            pytest.param({"max_length": 0}, ValueError, id="zero-length"),
            pytest.param({"max_elements": 2.5}, TypeError, id="float-elements"),
            pytest.param({"max_depth": "2"}, TypeError, id="str-depth"),
            pytest.param({"max_depth": True}, TypeError, id="bool-depth"),
            pytest.param({"max_length": 10.0}, TypeError, id="float-length"),
            pytest.param({"ellipsis": None}, TypeError, id="ellipsis-none"),
            pytest.param({"ellipsis": "\n"}, ValueError, id="ellipsis-newline"),
            pytest.param({"ellipsis": "..\r"}, ValueError, id="ellipsis-carriage-return"),
            pytest.param({"ellipsis": "\x00"}, ValueError, id="ellipsis-nul"),
        ],
    )
    def test_invalid_limits(self, kwargs, error):
        with pytest.raises(error, match=next(iter(kwargs))):
            DumpOptions(**kwargs)

    @pytest.mark.parametrize("marker", ["...", "…", "~", "<more>", ""])
    def test_printable_ellipsis(self, marker):
        assert DumpOptions(ellipsis=marker).ellipsis == marker

    def test_flags_coerced_to_bool(self):
        opts = DumpOptions(stringify_objects=1, pairs_detection="", sort_keys=[0])
        assert opts.stringify_objects is True
        assert opts.pairs_detection is False
        assert opts.sort_keys is True

    @pytest.mark.parametrize(
        "preset, expected",
        [
            pytest.param(DumpOptions.compact, DumpOptions(max_length=80, max_elements=3, max_depth=1), id="compact"),
            pytest.param(DumpOptions.debug, DumpOptions(max_elements=20, max_depth=4, stringify_objects=True),
                         id="debug"),
            pytest.param(DumpOptions.logging, DumpOptions(max_length=512, pairs_detection=True), id="logging"),
        ],
    )
    def test_presets(self, preset, expected):
        assert preset() == expected

    def test_merge(self):
        base = DumpOptions.logging()
        merged = base.merge(max_depth=5)
        assert merged.max_depth == 5
        assert merged.max_length == 512
        assert merged.pairs_detection is True
        assert base.max_depth == 2

    def test_merge_validates(self):
        with pytest.raises(ValueError, match="max_depth"):
            DumpOptions().merge(max_depth=-3)

    def test_merge_unknown(self):
        with pytest.raises(TypeError):
            DumpOptions().merge(max_items=5)


class TestFormatters:
    def test_with_formatter(self):
        opts = DumpOptions().with_formatter(Kind.NUMBER, hash_number)
        assert opts.formatters == {Kind.NUMBER: hash_number}
        assert isinstance(opts.formatters, frozendict)

    def test_with_formatter_by_name(self):
        opts = DumpOptions().with_formatter("number", hash_number)
        assert opts.formatters[Kind.NUMBER] is hash_number

    def test_without_formatter(self):
        opts = DumpOptions().with_formatter(Kind.NUMBER, hash_number).without_formatter(Kind.NUMBER)
        assert opts.formatters == {}

    def test_from_plain_dict(self):
        opts = DumpOptions(formatters={"text": hash_number})
        assert opts.formatters == frozendict({Kind.TEXT: hash_number})

    @pytest.mark.parametrize(
        "formatters",
        [
            pytest.param({"bogus": hash_number}, id="unknown-kind-name"),
            pytest.param({42: hash_number}, id="non-kind-key"),
            pytest.param({Kind.TEXT: "not callable"}, id="not-callable"),
            pytest.param([Kind.TEXT], id="not-mapping"),
        ],
    )
    def test_invalid(self, formatters):
        with pytest.raises(TypeError):
            DumpOptions(formatters=formatters)


class TestFromMapping:
    def test_values(self):
        opts = DumpOptions.from_mapping({"max_depth": 4, "pairs_detection": True})
        assert opts == DumpOptions(max_depth=4, pairs_detection=True)

    def test_base(self):
        opts = DumpOptions.from_mapping({"max_depth": 0}, base=DumpOptions.compact())
        assert opts == DumpOptions.compact().merge(max_depth=0)

    def test_unknown_names(self):
        with pytest.raises(ValueError, match="colour, max_items"):
            DumpOptions.from_mapping({"max_items": 3, "colour": "red", "max_depth": 1})

    def test_formatters_not_loadable(self):
        with pytest.raises(ValueError, match="formatters"):
            DumpOptions.from_mapping({"formatters": {}})

    def test_not_mapping(self):
        with pytest.raises(TypeError):
            DumpOptions.from_mapping([("max_depth", 1)])


class TestLoadOptions:
    def test_pyproject_section(self, toml_file):
        path = toml_file(
            "[project]\n"
            "name = 'demo'\n"
            "\n"
            "[tool.dwarn]\n"
            "max_depth = 3\n"
            "max_length = 200\n"
            "pairs_detection = true\n"
            "ellipsis = '~'\n"
        )
        opts = load_options(path)
        assert opts == DumpOptions(max_depth=3, max_length=200, pairs_detection=True, ellipsis="~")

    def test_missing_section(self, toml_file):
        path = toml_file("[project]\nname = 'demo'\n")
        assert load_options(path) == DumpOptions()

    def test_missing_section_keeps_base(self, toml_file):
        path = toml_file("[project]\nname = 'demo'\n")
        assert load_options(path, base=DumpOptions.debug()) == DumpOptions.debug()

    def test_custom_section(self, toml_file):
        path = toml_file("[diagnostics.dump]\nmax_elements = 2\n", name="app.toml")
        assert load_options(path, section="diagnostics.dump").max_elements == 2

    def test_top_level(self, toml_file):
        path = toml_file("max_elements = 9\n", name="dwarn.toml")
        assert load_options(path, section="").max_elements == 9

    def test_section_not_table(self, toml_file):
        path = toml_file("[tool]\ndwarn = 5\n")
        with pytest.raises(TypeError, match="tool.dwarn"):
            load_options(path)

    def test_invalid_value(self, toml_file):
        path = toml_file("[tool.dwarn]\nmax_depth = -1\n")
        with pytest.raises(ValueError, match="max_depth"):
            load_options(path)

    def test_unknown_option(self, toml_file):
        path = toml_file("[tool.dwarn]\nmax_items = 1\n")
        with pytest.raises(ValueError, match="max_items"):
            load_options(path)

    def test_broken_toml(self, toml_file):
        path = toml_file("[tool.dwarn\nmax_depth = 1\n")
        with pytest.raises(toml.TomlDecodeError):
            load_options(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_options(tmp_path / "absent.toml")
