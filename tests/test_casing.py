import pytest

from auraekit.casing import to_lower_camel_case, to_snake_case, to_upper_camel_case


def test_service_names_become_snake_case():
    assert to_snake_case("CellService") == "cell_service"
    assert to_snake_case("PodService") == "pod_service"


def test_already_snake_case_is_unchanged():
    assert to_snake_case("runtime") == "runtime"
    assert to_snake_case("cell_service") == "cell_service"


def test_acronym_run_is_split_before_last_capital():
    assert to_snake_case("XMLHttpRequest") == "xml_http_request"


def test_lower_camel_of_single_word():
    assert to_lower_camel_case("allocate") == "allocate"
    assert to_lower_camel_case("stop") == "stop"


def test_empty_and_separator_only_input():
    assert to_snake_case("") == ""
    assert to_lower_camel_case("__--") == ""
    assert to_upper_camel_case("  ") == ""


@pytest.mark.parametrize(
    "snake",
    ["cell_service", "pod_service", "allocate", "ae_runtime_free", "start_now"],
)
def test_snake_round_trips_through_upper_camel(snake):
    assert to_snake_case(to_upper_camel_case(snake)) == snake


@pytest.mark.parametrize(
    "snake",
    ["cell_service", "pod_service", "allocate", "free_all_cells"],
)
def test_snake_round_trips_through_lower_camel(snake):
    assert to_snake_case(to_lower_camel_case(snake)) == snake


@pytest.mark.parametrize(
    "text", ["CellService", "HTTPServer", "some-kebab-name", "mixed_Case Words"]
)
def test_conversions_are_idempotent(text):
    snake = to_snake_case(text)
    assert to_snake_case(snake) == snake
    lower = to_lower_camel_case(text)
    assert to_lower_camel_case(lower) == lower
    upper = to_upper_camel_case(text)
    assert to_upper_camel_case(upper) == upper


@pytest.mark.parametrize("text", ["CellService", "pod_service", "FreeRequest"])
def test_camel_forms_differ_only_in_first_letter(text):
    lower = to_lower_camel_case(text)
    upper = to_upper_camel_case(text)
    assert lower[1:] == upper[1:]
    assert lower[0] == upper[0].lower()


def test_snake_output_has_no_uppercase_or_separators_but_underscore():
    result = to_snake_case("Some Mixed-Input_HereNow")
    assert result == result.lower()
    assert all(ch.isalnum() or ch == "_" for ch in result)
    assert "__" not in result