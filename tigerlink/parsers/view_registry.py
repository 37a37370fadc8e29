"""Registry of Android view types that elements can be bound to.

Lookups accept a short name ("AppCompatEditText"), a fully-qualified name
("androidx.appcompat.widget.AppCompatEditText") or any package + short name
combination present in the table. Unregistered names that still look like a
`package.name.ClassName` are accepted as custom views with a warning.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger("tigerlink.parsers.view_registry")

_CUSTOM_CLASS_NAME_RE = re.compile(
    r"^[a-zA-Z][a-zA-Z0-9]*(\.[a-zA-Z][a-zA-Z0-9]*)*\.[A-Z][a-zA-Z0-9]*$"
)


@dataclass(frozen=True)
class ViewTypeInfo:
    full_name: str
    package: str
    short_name: str

    @classmethod
    def from_full_name(cls, full_name: str) -> "ViewTypeInfo":
        package, _, short_name = full_name.rpartition(".")
        return cls(full_name=full_name, package=package, short_name=short_name)


@dataclass(frozen=True)
class ViewTypeValidation:
    """Registry verdict for one requested view type.

    `resolved_type` is set exactly when `is_valid` is True.
    """

    is_valid: bool
    resolved_type: Optional[ViewTypeInfo] = None
    error_message: Optional[str] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def _entry(full_name: str) -> Tuple[str, ViewTypeInfo]:
    info = ViewTypeInfo.from_full_name(full_name)
    return info.short_name, info


BUILTIN_VIEW_TYPES: Dict[str, ViewTypeInfo] = dict(
    _entry(name)
    for name in (
        # Basic views
        "android.view.View",
        "android.view.ViewGroup",
        # Text
        "android.widget.TextView",
        "android.widget.EditText",
        "androidx.appcompat.widget.AppCompatTextView",
        "androidx.appcompat.widget.AppCompatEditText",
        # Buttons
        "android.widget.Button",
        "androidx.appcompat.widget.AppCompatButton",
        "android.widget.ImageButton",
        "androidx.appcompat.widget.AppCompatImageButton",
        # Images
        "android.widget.ImageView",
        "androidx.appcompat.widget.AppCompatImageView",
        # Layouts
        "android.widget.LinearLayout",
        "android.widget.RelativeLayout",
        "android.widget.FrameLayout",
        "androidx.constraintlayout.widget.ConstraintLayout",
        # Lists
        "android.widget.ListView",
        "androidx.recyclerview.widget.RecyclerView",
        # Progress
        "android.widget.ProgressBar",
        "android.widget.SeekBar",
        # Inputs
        "android.widget.CheckBox",
        "android.widget.RadioButton",
        "android.widget.Switch",
        "androidx.appcompat.widget.AppCompatCheckBox",
        "androidx.appcompat.widget.AppCompatRadioButton",
        "androidx.appcompat.widget.SwitchCompat",
        # Scrolling
        "android.widget.ScrollView",
        "android.widget.HorizontalScrollView",
        "androidx.core.widget.NestedScrollView",
        # Web
        "android.webkit.WebView",
        # App bars
        "androidx.appcompat.widget.Toolbar",
        "com.google.android.material.appbar.AppBarLayout",
        # Material
        "com.google.android.material.floatingactionbutton.FloatingActionButton",
        "com.google.android.material.button.MaterialButton",
        "com.google.android.material.textfield.TextInputLayout",
        "com.google.android.material.textfield.TextInputEditText",
        "androidx.cardview.widget.CardView",
        "com.google.android.material.card.MaterialCardView",
    )
)

DEFAULT_VIEW_TYPE = BUILTIN_VIEW_TYPES["View"]


class ViewTypeRegistry:
    """Lookup and validation of Android view types."""

    def __init__(self, view_types: Optional[Dict[str, ViewTypeInfo]] = None) -> None:
        self._view_types: Dict[str, ViewTypeInfo] = dict(
            BUILTIN_VIEW_TYPES if view_types is None else view_types
        )
        self._by_full_name: Dict[str, ViewTypeInfo] = {
            info.full_name: info for info in self._view_types.values()
        }

    def register(self, info: ViewTypeInfo) -> None:
        """Add a project-specific view type."""
        self._view_types[info.short_name] = info
        self._by_full_name[info.full_name] = info

    def available(self) -> List[str]:
        return list(self._view_types)

    def resolve(self, view_type: str) -> Optional[ViewTypeInfo]:
        """Look up by short name, then full name, then package + short name."""
        if view_type in self._view_types:
            return self._view_types[view_type]
        if view_type in self._by_full_name:
            return self._by_full_name[view_type]
        for info in self._view_types.values():
            if view_type == f"{info.package}.{info.short_name}":
                return info
        return None

    def validate(self, view_type: str) -> ViewTypeValidation:
        candidate = (view_type or "").strip()
        if not candidate:
            return ViewTypeValidation(
                is_valid=False,
                error_message="Android view type cannot be empty or whitespace only",
            )

        resolved = self.resolve(candidate)
        if resolved is not None:
            return ViewTypeValidation(is_valid=True, resolved_type=resolved)

        if _CUSTOM_CLASS_NAME_RE.match(candidate):
            return ViewTypeValidation(
                is_valid=True,
                resolved_type=ViewTypeInfo.from_full_name(candidate),
                warnings=(
                    f"Using custom Android view type: {candidate}. This type is "
                    "not in the built-in registry but will be used as specified.",
                ),
            )

        return ViewTypeValidation(
            is_valid=False,
            error_message=(
                f"Invalid Android view type format: '{candidate}'. Expected "
                "format: 'package.name.ClassName' or a registered short name "
                f"such as {', '.join(self.available()[:5])}."
            ),
        )
