"""Unit tests for the template resolution engine.

Tests cover:
- Repeat expansion and index()
- Native values versus interpolated strings
- Errors carrying JSON paths
- Template validation
- Deterministic seeding
- Generation from the countries/users template
"""

from __future__ import annotations

import copy
import json
import re
from datetime import datetime, timezone
from typing import Any

import pytest

from jsonmock.config import GeneratorSettings
from jsonmock.engine import TemplateGenerator, child_path, render_js, to_json
from jsonmock.errors import (
    GeneratorArgumentError,
    MisplacedRepeatError,
    PlaceholderSyntaxError,
    RepeatBoundsError,
    TemplateParseError,
    UnknownFunctionError,
)
from jsonmock.generators.registry import FunctionRegistry

pytestmark = pytest.mark.unit

REGISTERED_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2} [+-]\d{2}:\d{2}")


@pytest.fixture
def generator(settings: GeneratorSettings) -> TemplateGenerator:
    """Seeded generator."""
    return TemplateGenerator(settings)


class TestHelpers:
    """child_path, render_js and to_json."""

    def test_child_path(self) -> None:
        """Identifiers use dots, indices brackets, other keys quotes."""
        assert child_path("$", "countries") == "$.countries"
        assert child_path("$.countries", 2) == "$.countries[2]"
        assert child_path("$", "first name") == "$['first name']"
        assert child_path("$", "it's") == "$['it\\'s']"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (3.0, "3"),
            (2.5, "2.5"),
            (7, "7"),
            ("x", "x"),
        ],
    )
    def test_render_js(self, value: Any, expected: str) -> None:
        """Values concatenate the way JavaScript renders them."""
        assert render_js(value) == expected

    def test_to_json(self) -> None:
        """Compact by default, two-space indent when pretty."""
        assert to_json({"a": [1, "é"]}) == '{"a":[1,"é"]}'
        assert to_json({"a": 1}, pretty=True) == '{\n  "a": 1\n}'


class TestRepeat:
    """Repeat marker expansion."""

    def test_fixed_count(self, generator: TemplateGenerator) -> None:
        """repeat(n) yields exactly n elements."""
        assert generator.generate(["{{repeat(3)}}", "x"]) == ["x", "x", "x"]

    def test_range(self, generator: TemplateGenerator) -> None:
        """repeat(min, max) yields between min and max elements."""
        lengths = {len(generator.generate(["{{repeat(1, 3)}}", 1])) for _ in range(100)}
        assert lengths == {1, 2, 3}

    def test_zero(self, generator: TemplateGenerator) -> None:
        """repeat(0) yields an empty array."""
        assert generator.generate(["{{repeat(0)}}", "x"]) == []

    def test_marker_without_body(self, generator: TemplateGenerator) -> None:
        """A marker alone yields an empty array."""
        assert generator.generate(["{{repeat(2)}}"]) == []

    def test_multiple_body_elements(self, generator: TemplateGenerator) -> None:
        """Every element after the marker is repeated as a group."""
        assert generator.generate(["{{repeat(2)}}", "a", "b"]) == ["a", "b", "a", "b"]

    def test_marker_surrounding_whitespace(self, generator: TemplateGenerator) -> None:
        """Whitespace around the marker token is ignored."""
        assert generator.generate([" {{repeat(2)}} ", 0]) == [0, 0]

    def test_each_repetition_is_generated_afresh(self, generator: TemplateGenerator) -> None:
        """Repeated elements are resolved independently."""
        ids = generator.generate(["{{repeat(20)}}", "{{objectId()}}"])
        assert len(set(ids)) == 20

    def test_index(self, generator: TemplateGenerator) -> None:
        """index() counts repetitions; index(start) offsets it."""
        template = ["{{repeat(3)}}", {"i": "{{index()}}", "n": "{{index(1)}}"}]
        assert generator.generate(template) == [
            {"i": 0, "n": 1},
            {"i": 1, "n": 2},
            {"i": 2, "n": 3},
        ]

    def test_nested_index(self, generator: TemplateGenerator) -> None:
        """index() refers to the innermost repetition."""
        template = ["{{repeat(2)}}", {"i": "{{index()}}", "inner": ["{{repeat(2)}}", "{{index()}}"]}]
        assert generator.generate(template) == [
            {"i": 0, "inner": [0, 1]},
            {"i": 1, "inner": [0, 1]},
        ]

    def test_plain_arrays_are_kept(self, generator: TemplateGenerator) -> None:
        """Arrays without a marker resolve element by element."""
        assert generator.generate([1, "two", "{{index()}}"]) == [1, "two", 0]

    def test_inverted_bounds(self, generator: TemplateGenerator) -> None:
        """max below min is rejected with the marker's path."""
        with pytest.raises(RepeatBoundsError) as exc_info:
            generator.generate({"list": ["{{repeat(3, 1)}}", "x"]})
        assert exc_info.value.path == "$.list[0]"

    @pytest.mark.parametrize("marker", ["{{repeat(-1, 2)}}", "{{repeat(1.5)}}", "{{repeat()}}", "{{repeat(1, true)}}"])
    def test_invalid_bounds(self, generator: TemplateGenerator, marker: str) -> None:
        """Negative, non-integral or missing bounds are rejected."""
        with pytest.raises(RepeatBoundsError):
            generator.generate([marker, "x"])

    def test_max_repeat_limit(self, settings: GeneratorSettings) -> None:
        """Counts above max_repeat are rejected."""
        generator = TemplateGenerator(settings.model_copy(update={"max_repeat": 5}))
        with pytest.raises(RepeatBoundsError, match="exceeds the configured limit"):
            generator.generate(["{{repeat(10)}}", "x"])

    def test_misplaced_marker_in_array(self, generator: TemplateGenerator) -> None:
        """A marker after the first element is an error."""
        with pytest.raises(MisplacedRepeatError) as exc_info:
            generator.generate({"a": ["x", "{{repeat(2)}}"]})
        assert exc_info.value.path == "$.a[1]"

    def test_misplaced_marker_in_object(self, generator: TemplateGenerator) -> None:
        """A marker as an object value is an error."""
        with pytest.raises(MisplacedRepeatError):
            generator.generate({"a": "{{repeat(2)}}"})

    def test_marker_inside_interpolation(self, generator: TemplateGenerator) -> None:
        """A marker mixed with other text is not a marker."""
        with pytest.raises(MisplacedRepeatError):
            generator.generate(["items: {{repeat(2)}}", "x"])


class TestStrings:
    """Native values and interpolation."""

    def test_whole_token_keeps_native_type(self, generator: TemplateGenerator) -> None:
        """A string that is one placeholder becomes the function's value."""
        data = generator.generate({"age": "{{integer(20, 40)}}", "active": "{{bool()}}"})
        assert isinstance(data["age"], int)
        assert 20 <= data["age"] <= 40
        assert isinstance(data["active"], bool)

    def test_interpolation_produces_string(self, generator: TemplateGenerator) -> None:
        """Placeholders mixed with text are concatenated."""
        value = generator.generate("Age: {{integer(5, 5)}}, active: {{random(true)}}")
        assert value == "Age: 5, active: true"

    def test_interpolated_integral_float(self, generator: TemplateGenerator) -> None:
        """Integral floats interpolate without a decimal point."""
        assert generator.generate("{{floating(2, 2, 0)}}!") == "2!"

    def test_plain_values_pass_through(self, generator: TemplateGenerator) -> None:
        """Non-template values are copied unchanged."""
        template = {"n": 1, "f": 2.5, "b": False, "z": None, "s": "text {not a token}"}
        assert generator.generate(template) == template

    def test_key_order_preserved(self, generator: TemplateGenerator) -> None:
        """Objects keep their key order."""
        data = generator.generate({"z": 1, "a": "{{bool()}}", "m": 2})
        assert list(data) == ["z", "a", "m"]

    def test_template_not_modified(self, generator: TemplateGenerator, countries_template: Any) -> None:
        """generate returns a new tree."""
        before = copy.deepcopy(countries_template)
        generator.generate(countries_template)
        assert countries_template == before


class TestErrors:
    """Errors raised during generation carry the node's JSON path."""

    def test_unknown_function(self, generator: TemplateGenerator) -> None:
        """Unknown functions list the available ones."""
        with pytest.raises(UnknownFunctionError) as exc_info:
            generator.generate({"users": [{"name": "{{fistName()}}"}]})
        assert exc_info.value.path == "$.users[0].name"
        assert "firstName" in exc_info.value.available
        assert str(exc_info.value).startswith("$.users[0].name: Unknown generator function 'fistName'")

    def test_syntax_error(self, generator: TemplateGenerator) -> None:
        """Malformed tokens raise PlaceholderSyntaxError."""
        with pytest.raises(PlaceholderSyntaxError) as exc_info:
            generator.generate({"a": "{{integer(1, 2}}"})
        assert exc_info.value.path == "$.a"

    def test_argument_error(self, generator: TemplateGenerator) -> None:
        """Invalid arguments raise GeneratorArgumentError."""
        with pytest.raises(GeneratorArgumentError) as exc_info:
            generator.generate({"a": "{{integer(5, 1)}}"})
        assert exc_info.value.path == "$.a"
        assert exc_info.value.function == "integer"

    def test_arity_error(self, generator: TemplateGenerator) -> None:
        """Too many arguments raise GeneratorArgumentError."""
        with pytest.raises(GeneratorArgumentError):
            generator.generate("{{bool(1)}}")

    def test_path_in_repeated_element(self, generator: TemplateGenerator) -> None:
        """Paths point at the template element, not the output index."""
        with pytest.raises(UnknownFunctionError) as exc_info:
            generator.generate({"list": ["{{repeat(2)}}", {"v": "{{nope()}}"}]})
        assert exc_info.value.path == "$.list[1].v"

    def test_custom_registry(self, settings: GeneratorSettings) -> None:
        """An empty registry knows no functions."""
        generator = TemplateGenerator(settings, registry=FunctionRegistry())
        with pytest.raises(UnknownFunctionError, match="Available: none"):
            generator.generate("{{bool()}}")

    def test_generate_text_parse_error(self, generator: TemplateGenerator) -> None:
        """Invalid JSON5 text raises TemplateParseError."""
        with pytest.raises(TemplateParseError):
            generator.generate_text("{a: ")


class TestValidate:
    """TemplateGenerator.validate."""

    def test_valid_template(self, generator: TemplateGenerator, countries_template: Any) -> None:
        """The countries template has no issues."""
        assert generator.validate(countries_template) == []

    def test_collects_every_issue(self, generator: TemplateGenerator) -> None:
        """All problems are reported in document order."""
        template = {
            "a": "{{nope()}}",
            "b": "{{integer(1, 2}}",
            "c": ["{{repeat(3, 1)}}", "{{bool(1)}}"],
            "d": ["x", "{{repeat(2)}}"],
        }
        issues = generator.validate(template)
        assert [(i.path, i.kind) for i in issues] == [
            ("$.a", "UnknownFunctionError"),
            ("$.b", "PlaceholderSyntaxError"),
            ("$.c[0]", "RepeatBoundsError"),
            ("$.c[1]", "GeneratorArgumentError"),
            ("$.d[1]", "MisplacedRepeatError"),
        ]

    def test_messages_have_no_path_prefix(self, generator: TemplateGenerator) -> None:
        """Issue messages exclude the path, which has its own field."""
        (issue,) = generator.validate({"a": "{{nope()}}"})
        assert issue.message.startswith("Unknown generator function 'nope'")

    def test_validate_generates_nothing(self, generator: TemplateGenerator) -> None:
        """Argument values are not checked, only arity."""
        assert generator.validate({"a": "{{integer(5, 1)}}"}) == []


class TestDeterminism:
    """Seeded generation is reproducible."""

    def test_same_seed_same_output(self, settings: GeneratorSettings, countries_template: Any) -> None:
        """Identical seeds and reference times give identical data."""
        first = TemplateGenerator(settings).generate(countries_template)
        second = TemplateGenerator(settings).generate(countries_template)
        assert first == second

    def test_seed_override(self, settings: GeneratorSettings, countries_template: Any) -> None:
        """The seed argument overrides settings.seed."""
        first = TemplateGenerator(settings, seed=1).generate(countries_template)
        second = TemplateGenerator(settings.model_copy(update={"seed": 1})).generate(countries_template)
        assert first == second

    def test_different_seeds_differ(self, settings: GeneratorSettings, countries_template: Any) -> None:
        """Different seeds give different data."""
        first = TemplateGenerator(settings, seed=1).generate(countries_template)
        second = TemplateGenerator(settings, seed=2).generate(countries_template)
        assert first != second

    def test_successive_runs_continue_sequence(self, generator: TemplateGenerator) -> None:
        """Repeated calls draw new values; reset starts over."""
        template = ["{{repeat(5)}}", "{{objectId()}}"]
        first = generator.generate(template)
        second = generator.generate(template)
        generator.reset()
        assert first != second
        assert generator.generate(template) == first


class TestCountriesGeneration:
    """Generating from the countries/users template."""

    @pytest.fixture
    def data(self, generator: TemplateGenerator, countries_template: Any) -> Any:
        """Generated data for the countries template."""
        return generator.generate(countries_template)

    def test_country_count(self, data: Any) -> None:
        """Two or three countries are generated."""
        assert 2 <= len(data["countries"]) <= 3
        for country in data["countries"]:
            assert isinstance(country["name"], str)

    def test_users(self, data: Any) -> None:
        """Every user has well-formed fields."""
        for country in data["countries"]:
            assert 1 <= len(country["users"]) <= 3
            for user in country["users"]:
                assert re.fullmatch(r"[0-9a-f]{24}", user["id"])
                assert isinstance(user["isActive"], bool)
                assert re.fullmatch(r"\$\d{1,3}(,\d{3})*\.\d{2}", user["balance"])
                assert 50 <= float(user["balance"][1:].replace(",", "")) <= 4000
                assert isinstance(user["age"], int)
                assert 20 <= user["age"] <= 40
                assert " " in user["name"]
                assert "@" in user["email"]
                assert isinstance(user["company"], str)
                assert REGISTERED_RE.fullmatch(user["registered"])

    def test_registered_range(self, data: Any) -> None:
        """Registration dates fall between 2017-01-01 and the reference time."""
        for country in data["countries"]:
            for user in country["users"]:
                registered = datetime.strptime(user["registered"], "%Y-%m-%dT%H:%M:%S %z")
                assert datetime(2017, 1, 1, tzinfo=timezone.utc) <= registered
                assert registered <= datetime(2024, 6, 1, 12, tzinfo=timezone.utc)

    def test_tags_and_friends(self, data: Any) -> None:
        """tags hold 0-2 single words; friends 0-3 id/name objects."""
        for country in data["countries"]:
            for user in country["users"]:
                assert 0 <= len(user["tags"]) <= 2
                for tag in user["tags"]:
                    assert tag and " " not in tag
                assert 0 <= len(user["friends"]) <= 3
                for friend in user["friends"]:
                    assert list(friend) == ["id", "name"]
                    assert re.fullmatch(r"[0-9a-f]{24}", friend["id"])

    def test_output_is_json_serialisable(self, data: Any) -> None:
        """Generated data round-trips through the JSON writer."""
        assert json.loads(to_json(data)) == data
