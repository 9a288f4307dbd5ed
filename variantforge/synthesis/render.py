"""Render a generated namespace as Python source.

The output is a standalone module: one dataclass per variant with string
annotations (type expressions are opaque), TypeVars for type parameters,
and the capability bindings as a plain ``_CAPABILITIES`` dict.

Every name the module needs for itself is underscore-prefixed or reached
through an underscored module alias, so variant classes are the only public
globals. Variant names cannot start with an underscore, which keeps the two
sets apart. Rendering is deterministic for a given namespace and config.
"""

from __future__ import annotations

import pprint

from ..config import VariantForgeConfig, get_config
from ..core.models import GenericParamKind
from .binder import DEREF_ATTR, deref_view
from .pipeline import GeneratedNamespace
from .synthesizer import field_layout


def _render_header(namespace: GeneratedNamespace, banner: str) -> list[str]:
    lines = [f"# {line}".rstrip() for line in banner.splitlines()]
    lines += [
        "",
        f'"""Variant types generated from {namespace.enum_name} '
        f'({namespace.profile.value} profile)."""',
        "",
    ]
    return lines


def _render_deref_view(accessor: str, pad: str) -> list[str]:
    return [
        "",
        f"{pad}@_builtins.property",
        f"{pad}def {DEREF_ATTR}(self):",
        f"{pad}{pad}return self.{accessor}",
        "",
        f"{pad}@{DEREF_ATTR}.setter",
        f"{pad}def {DEREF_ATTR}(self, value):",
        f"{pad}{pad}self.{accessor} = value",
    ]


def render_namespace(
    namespace: GeneratedNamespace,
    *,
    config: VariantForgeConfig | None = None,
) -> str:
    """Render one namespace to module source text."""
    settings = config or get_config()
    pad = " " * settings.output.indent
    schema = namespace.schema

    type_params = [
        p.name for p in schema.generic_params if p.kind == GenericParamKind.TYPE
    ]
    lines = _render_header(namespace, settings.output.header)
    lines += [
        "import builtins as _builtins",
        "import dataclasses as _dataclasses",
    ]
    if type_params:
        lines.append("import typing as _typing")
    lines.append("")

    if type_params:
        type_vars = ", ".join(f'_typing.TypeVar("{name}")' for name in type_params)
        lines.append(f"_TYPE_VARS = ({type_vars},)")
    rendered_params = tuple(p.render() for p in schema.generic_params)
    lines.append(f"_GENERIC_PARAMS = {rendered_params!r}")

    if namespace.frozen:
        decorator = "@_dataclasses.dataclass(frozen=True)"
    else:
        decorator = "@_dataclasses.dataclass"
    base = "(_typing.Generic[_TYPE_VARS])" if type_params else ""
    for variant in schema.variants:
        lines += ["", "", decorator, f"class {variant.name}{base}:"]
        lines.append(
            f'{pad}"""{schema.name}::{variant.name} ({variant.kind.value} variant)."""'
        )
        lines.append("")
        layout = field_layout(variant)
        for attr, type_expr in layout:
            lines.append(f"{pad}{attr}: {type_expr!r}")
        if layout:
            lines.append("")
        lines.append(f"{pad}__generic_params__ = _GENERIC_PARAMS")

        binding = namespace.bindings.get(variant.name)
        accessor = None
        if binding is not None:
            accessor = deref_view(binding, [attr for attr, _ in layout])
        if accessor is not None:
            lines += _render_deref_view(accessor, pad)

    capabilities = {
        name: binding.model_dump(mode="json")
        for name, binding in namespace.bindings.items()
    }
    lines += ["", ""]
    lines.append(
        "_CAPABILITIES = " + pprint.pformat(capabilities, sort_dicts=False, width=88)
    )
    lines.append("")
    lines.append(f"__all__ = {list(namespace.types)!r}")
    return "\n".join(lines) + "\n"


def render_module_name(namespace: GeneratedNamespace) -> str:
    """File name the rendered module is conventionally written to."""
    return f"{namespace.name}.py"
