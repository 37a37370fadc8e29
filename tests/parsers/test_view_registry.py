"""Tests for the Android view-type registry."""

from tigerlink.parsers.view_registry import (
    BUILTIN_VIEW_TYPES,
    DEFAULT_VIEW_TYPE,
    ViewTypeInfo,
    ViewTypeRegistry,
)


def test_resolve_by_short_and_full_name() -> None:
    registry = ViewTypeRegistry()

    by_short = registry.resolve("RecyclerView")
    by_full = registry.resolve("androidx.recyclerview.widget.RecyclerView")

    assert by_short is not None
    assert by_short == by_full
    assert by_short.package == "androidx.recyclerview.widget"


def test_default_view_type_is_android_view() -> None:
    assert DEFAULT_VIEW_TYPE.full_name == "android.view.View"
    assert "MaterialButton" in BUILTIN_VIEW_TYPES


def test_validate_rejects_blank_names() -> None:
    validation = ViewTypeRegistry().validate("   ")

    assert not validation.is_valid
    assert validation.resolved_type is None
    assert "empty" in (validation.error_message or "")


def test_validate_accepts_custom_class_with_warning() -> None:
    validation = ViewTypeRegistry().validate("com.acme.ui.FancyView")

    assert validation.is_valid
    assert validation.resolved_type == ViewTypeInfo(
        full_name="com.acme.ui.FancyView", package="com.acme.ui", short_name="FancyView"
    )
    assert validation.warnings


def test_validate_rejects_non_class_names() -> None:
    validation = ViewTypeRegistry().validate("not a view")

    assert not validation.is_valid
    assert validation.resolved_type is None
    assert "Invalid Android view type format" in (validation.error_message or "")


def test_register_adds_project_specific_view() -> None:
    registry = ViewTypeRegistry(view_types={})
    info = ViewTypeInfo.from_full_name("com.acme.ui.Chart")

    registry.register(info)

    assert registry.available() == ["Chart"]
    assert registry.resolve("Chart") == info
    assert registry.validate("com.acme.ui.Chart").warnings == ()
