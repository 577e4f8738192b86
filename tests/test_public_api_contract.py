import inspect
from datetime import timezone

import difflogkit


def test_public_api_symbol_list_is_explicit_and_stable() -> None:
    assert difflogkit.__all__ == [
        "__version__",
        "DiffLogger",
        "HeaderConfig",
        "HeaderConfigError",
        "RenderOptions",
        "Change",
        "Composite",
        "GenericChange",
        "NumericChange",
        "TemporalChange",
        "TextualChange",
        "BooleanChange",
        "ValueChange",
        "Header",
        "Added",
        "Removed",
        "Modified",
        "FieldChange",
        "diff",
        "render",
        "log_diff",
    ]


def test_public_api_function_signatures_and_annotations() -> None:
    expected_parameter_order = {
        "diff": ("previous", "next", "config"),
        "render": ("change", "color", "local_tz"),
        "log_diff": ("previous", "next", "config", "header_config_path", "color"),
    }
    positional_count = {"diff": 2, "render": 1, "log_diff": 2}

    for name, parameters in expected_parameter_order.items():
        function = getattr(difflogkit, name)
        signature = inspect.signature(function)
        assert tuple(signature.parameters.keys()) == parameters
        assert "return" in function.__annotations__
        assert function.__doc__ is not None
        assert function.__doc__.strip() != ""

        for index, parameter in enumerate(signature.parameters.values()):
            if index < positional_count[name]:
                assert parameter.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
            else:
                assert parameter.kind is inspect.Parameter.KEYWORD_ONLY


def test_core_workflow_works_via_public_api_only(capsys) -> None:
    config = difflogkit.HeaderConfig().with_header("timestamp", False)
    previous = {"row": {"timestamp": "2023-04-07T11:17:50+00:00", "value": 1}}
    next_value = {"row": {"timestamp": "2023-04-07T12:17:50+00:00", "value": 2}}

    change = difflogkit.diff(previous, next_value, config=config)
    assert isinstance(change, difflogkit.Composite)
    assert difflogkit.diff(previous, previous, config=config) is None

    rendered = difflogkit.render(change, color=False, local_tz=timezone.utc)
    assert rendered == "~ row◖11:17:50 -> 12:17:50 | 1:00 hours◗:\n  ~ value: 1 -> 2 | 1"

    difflogkit.log_diff({"a": 1}, {"a": 2}, color=False)
    assert capsys.readouterr().out == "~ a: 1 -> 2 | 1\n"


def test_log_diff_rejects_conflicting_config_sources(tmp_path) -> None:
    try:
        difflogkit.log_diff(
            {},
            {},
            config=difflogkit.HeaderConfig(),
            header_config_path=tmp_path / "headers.json",
        )
    except ValueError as error:
        assert "not both" in str(error)
    else:  # pragma: no cover
        raise AssertionError("expected ValueError")
