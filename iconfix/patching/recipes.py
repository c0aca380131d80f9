# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Concrete patch recipes for naive-ui and the table that selects them.

Every recipe clones a module-level icon vnode per render through the
helper imported from the virtual overlay, so a vnode (and the DOM element it
was last mounted to) is never shared between component instances.
"""

import logging
import re
from typing import Callable, Dict, Optional, Tuple

from ..config import HELPER_NAME
from .descriptors import Category, Component, Insertion, Mode, PatchDescriptor, Replacement

logger = logging.getLogger(__name__)

_RENDER = r"render\s*\(\)\s*\{"


def _clone_bindings(pairs, indent: str = "    ") -> str:
    return "".join(f"\n{indent}const {local} = {HELPER_NAME}({source});" for local, source in pairs)


REPLACEABLE = PatchDescriptor(
    name="replaceable",
    replacements=(
        Replacement("function replaceable(name, icon)", "function replaceable(name, _icon_)"),
    ),
    insertions=(
        Insertion(
            anchor=r"function replaceable\s*\(([^,]+),\s*icon\)\s*\{",
            inner_anchor=r"setup\s*\(\)\s*\{",
            template=f"\n  const icon = {HELPER_NAME}(_icon_);",
        ),
    ),
)

# Result keeps its status images in a map of thunks: `404: () => image404`.
_RESULT_STATUS_ICONS = Replacement(
    pattern=r"(\b\d{3}): \(\) => ([\w$]+)",
    replacement=rf"\1: () => {HELPER_NAME}(\2)",
    regex=True,
    count=0,
)

# Icons imported by each component's default export, production layout.
_COMPONENT_ICONS: Dict[Component, Tuple[str, ...]] = {
    Component.CHECKBOX: ("CheckMark", "LineMark"),
    Component.BACK_TOP: ("BackTopIcon",),
    Component.RATE: ("StarIcon",),
    Component.RESULT: (),
}

# defineComponent `name` option of each component, used in the aggregate file.
_COMPONENT_NAMES: Dict[Component, str] = {
    Component.CHECKBOX: "Checkbox",
    Component.BACK_TOP: "BackTop",
    Component.RATE: "Rate",
    Component.RESULT: "Result",
}


def _build_recipe(component: Component) -> PatchDescriptor:
    icons = _COMPONENT_ICONS[component]
    replacements: Tuple[Replacement, ...] = ()
    insertions: Tuple[Insertion, ...] = ()
    if icons:
        # The renamed imports are only valid once render() redeclares them.
        insertions = (
            Insertion(
                anchor=r"export default defineComponent\(\{",
                inner_anchor=_RENDER,
                template=_clone_bindings((icon, f"_{icon}_") for icon in icons),
                renames=tuple(
                    Replacement(
                        pattern=rf"import {icon} from ([\"'])(\./{icon}\.mjs)\1",
                        replacement=rf"import _{icon}_ from \1\2\1",
                        regex=True,
                    )
                    for icon in icons
                ),
            ),
        )
    if component is Component.RESULT:
        replacements += (_RESULT_STATUS_ICONS,)
    return PatchDescriptor(
        name=f"export-default:{component.value}",
        replacements=replacements,
        insertions=insertions,
    )


def _dev_recipe() -> PatchDescriptor:
    """
    One descriptor for the pre-bundled aggregate file.

    The pre-bundler hoists every icon to a `var <Icon>_default` binding and
    inlines each component as `defineComponent({ name: "<Name>", ... })`.
    """
    insertions = []
    for component, icons in _COMPONENT_ICONS.items():
        if not icons:
            continue
        insertions.append(
            Insertion(
                anchor=rf"defineComponent\(\{{(?=\s*name:\s*[\"']{_COMPONENT_NAMES[component]}[\"'])",
                inner_anchor=_RENDER,
                template=_clone_bindings(
                    (f"{icon}_default", f"_{icon}_default_") for icon in icons
                ),
                renames=tuple(
                    Replacement(
                        pattern=rf"\bvar {icon}_default\b",
                        replacement=f"var _{icon}_default_",
                        regex=True,
                    )
                    for icon in icons
                ),
            )
        )
    return PatchDescriptor(
        name="export-default:aggregate",
        replacements=(_RESULT_STATUS_ICONS,),
        insertions=tuple(insertions),
    )


BUILD_RECIPES: Dict[Component, PatchDescriptor] = {c: _build_recipe(c) for c in Component}
DEV_RECIPE = _dev_recipe()

_COMPONENT_DIR = re.compile(r"/naive-ui/es/([\w-]+)/src/")


def component_for(file_id: str) -> Optional[Component]:
    """Pick the component a production file belongs to by its naive-ui directory."""
    match = _COMPONENT_DIR.search(file_id.replace("\\", "/"))
    if match is None:
        return None
    try:
        return Component(match.group(1))
    except ValueError:
        return None


def _build_export_default(file_id: str) -> Optional[PatchDescriptor]:
    component = component_for(file_id)
    if component is None:
        logger.warning(f"No export-default recipe for {file_id}")
        return None
    return BUILD_RECIPES[component]


RECIPE_TABLE: Dict[Tuple[Mode, Category], Callable[[str], Optional[PatchDescriptor]]] = {
    (Mode.BUILD, Category.REPLACEABLE): lambda file_id: REPLACEABLE,
    (Mode.SERVE, Category.REPLACEABLE): lambda file_id: REPLACEABLE,
    (Mode.BUILD, Category.EXPORT_DEFAULT): _build_export_default,
    (Mode.SERVE, Category.EXPORT_DEFAULT): lambda file_id: DEV_RECIPE,
}


def _check_table() -> None:
    missing = [(m, c) for m in Mode for c in Category if (m, c) not in RECIPE_TABLE]
    if missing:
        raise RuntimeError(f"Recipe table is missing entries for {missing}")
    missing_components = [c for c in Component if c not in BUILD_RECIPES]
    if missing_components:
        raise RuntimeError(f"No build recipe for components {missing_components}")


_check_table()


def select_descriptor(mode: Mode, category: Category, file_id: str) -> Optional[PatchDescriptor]:
    """Return the descriptor for *file_id*, or None when no recipe applies."""
    return RECIPE_TABLE[(mode, category)](file_id)
