"""Unit tests for declaration and aggregate records."""

import dataclasses

import pytest

from odocgen.models import AggregateModel, FieldInfo, Fragment, MethodInfo


class TestMethodInfo:
    """Tests for MethodInfo."""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            (MethodInfo(1, 1), ""),
            (MethodInfo(1, 1, ("self", "a")), "self, a"),
            (MethodInfo(1, 1, ("self",), var_arg="args"), "self, *args"),
            (MethodInfo(1, 1, ("self",), kw_only_args=("a", "b")), "self, *, a, b"),
            (
                MethodInfo(1, 1, ("self",), "args", ("key",), "kwargs"),
                "self, *args, key, **kwargs",
            ),
            (MethodInfo(1, 1, kw_arg="kw"), "**kw"),
        ],
    )
    def test_signature(self, method: MethodInfo, expected: str) -> None:
        assert method.signature() == expected

    def test_frozen(self) -> None:
        """Test that extracted records cannot be modified."""
        method = MethodInfo(1, 1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            method.line = 2  # type: ignore[misc]


class TestFragment:
    """Tests for Fragment."""

    def test_is_empty(self) -> None:
        assert Fragment("a.py").is_empty
        assert not Fragment("a.py", fields={"x": FieldInfo(1, 1, "x = 1")}).is_empty

    def test_sorted_members(self) -> None:
        fragment = Fragment(
            "a.py",
            fields={"b": FieldInfo(2, 1, "b = 1"), "a": FieldInfo(1, 1, "a = 1")},
            methods={"z": MethodInfo(3, 1), "y": MethodInfo(4, 1)},
        )

        assert [name for name, _ in fragment.sorted_fields()] == ["a", "b"]
        assert [name for name, _ in fragment.sorted_methods()] == ["y", "z"]

    def test_members_read_only(self) -> None:
        """Test that a fragment cannot change after construction."""
        fields = {"a": FieldInfo(1, 1, "a = 1")}
        fragment = Fragment("a.py", fields=fields)
        fields["b"] = FieldInfo(2, 1, "b = 2")

        with pytest.raises(TypeError):
            fragment.fields["c"] = FieldInfo(3, 1, "c = 3")  # type: ignore[index]
        with pytest.raises(TypeError):
            fragment.methods["m"] = MethodInfo(4, 1)  # type: ignore[index]
        assert list(fragment.fields) == ["a"]

    def test_hashable(self) -> None:
        first = Fragment("a.py", methods={"m": MethodInfo(1, 1, ("self",))})
        second = Fragment("a.py", methods={"m": MethodInfo(1, 1, ("self",))})

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_to_dict(self) -> None:
        fragment = Fragment("a.py", fields={"a": FieldInfo(1, 5, "a = 1")})

        assert fragment.to_dict() == {
            "source_file": "a.py",
            "fields": {"a": {"line": 1, "column": 5, "declaration": "a = 1"}},
            "methods": {},
        }


class TestAggregateModel:
    """Tests for AggregateModel."""

    def test_displayed_fragments(self) -> None:
        """Test page order: original first, then extensions descending."""
        original = Fragment("sale/a.py")
        ext_a = Fragment("a/x.py")
        ext_b = Fragment("b/x.py")
        model = AggregateModel("x", original=original, extensions=[ext_a, ext_b])

        assert list(model.displayed_fragments()) == [
            ("Original", original),
            ("Inherited", ext_b),
            ("Inherited", ext_a),
        ]
        assert model.extension_files == ["b/x.py", "a/x.py"]

    def test_displayed_fragments_without_original(self) -> None:
        ext = Fragment("a.py")
        model = AggregateModel("x", extensions=[ext])

        assert list(model.displayed_fragments()) == [("Inherited", ext)]
        assert model.to_dict()["original"] is None
