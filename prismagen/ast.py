"""The intermediate tree the code generator works from.

It is built from a :class:`~prismagen.dmmf.Document` and gathers the scalar
types, enums, models and the read and write filters they expose.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from . import dmmf
from .index import Index, to_pascal_case

_LIST = "List"


@dataclass
class FilterMethod:
    """One method of a filter: a name in generated code and the query action."""

    name: str = ""
    action: str = ""
    is_list: bool = False
    deprecated: str = ""
    typ: str = ""


@dataclass
class Filter:
    """A named group of filter methods."""

    name: str
    methods: list[FilterMethod] = field(default_factory=list)


@dataclass
class EnumDef:
    """An enum of the data model with its value names."""

    name: str
    values: list[str] = field(default_factory=list)


@dataclass
class AstField:
    """A model field, marked when it was added by the generator itself."""

    prisma: bool
    field: dmmf.Field

    def __getattr__(self, name: str) -> Any:
        if name == "field":
            raise AttributeError(name)
        return getattr(self.field, name)


@dataclass
class AstModel:
    """A model together with its fields and unique indexes."""

    name: str
    fields: list[AstField] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)
    source_model: dmmf.Model | None = field(default=None, repr=False)


def collect_scalars(document: dmmf.Document) -> list[str]:
    """Names of all scalar input types, in first-seen order, without repeats."""
    scalars: list[str] = []
    for core in document.schema.input_object_types.prisma:
        for outer in core.fields:
            for input_type in outer.input_types:
                if input_type.location != "scalar":
                    continue
                if input_type.typ not in scalars:
                    scalars.append(input_type.typ)
    return scalars


def collect_enums(document: dmmf.Document) -> list[EnumDef]:
    """The enums declared by the data model."""
    return [
        EnumDef(name=e.name, values=list(e.values))
        for e in document.schema.enum_types.model
    ]


def collect_models(document: dmmf.Document) -> list[AstModel]:
    """The models of the data model, with their fields and indexes."""
    return [
        AstModel(
            name=m.name,
            fields=[AstField(prisma=False, field=copy.deepcopy(f)) for f in m.fields],
            indexes=m.indexes(),
            source_model=copy.deepcopy(m),
        )
        for m in document.datamodel.models
    ]


def _last_input(
    outer: dmmf.OuterInputType, locations: tuple[str, ...], null_name: str
) -> tuple[str, bool] | None:
    found = None
    for input_type in outer.input_types:
        if input_type.location in locations and input_type.typ != null_name:
            found = (input_type.typ, input_type.is_list)
    return found


def convert_field(field: dmmf.OuterInputType) -> FilterMethod | None:
    """Turn a read filter input field into a filter method, if it maps to one."""
    if field.name == "equals":
        return None

    found = _last_input(field, ("scalar", "enumTypes"), "Null")
    if found is None:
        return None
    typ, is_list = found

    if field.name == "in":
        name = "InVec"
    elif field.name == "notIn":
        name = "NotInVec"
    else:
        name = to_pascal_case(field.name)

    return FilterMethod(name=name, action=field.name, typ=typ, is_list=is_list)


def _convert_all(core: dmmf.CoreType) -> list[FilterMethod]:
    return [m for m in (convert_field(f) for f in core.fields) if m is not None]


class AST:
    """Everything the generator needs, derived from one document."""

    def __init__(self, document: dmmf.Document) -> None:
        self._document = document
        self.order_bys: list[Any] = []
        self.scalars = collect_scalars(document)
        self.enums = collect_enums(document)
        self.models = collect_models(document)
        self.read_filters = self._build_read_filters()
        self.write_filters = self._build_write_filters()

    def pick(self, names: list[str]) -> dmmf.CoreType | None:
        """The first input object type matching a name, trying names in order."""
        for wanted in names:
            for core in self._document.schema.input_object_types.prisma:
                if core.name == wanted:
                    return core
        return None

    def read_filter(self, scalar: str, is_list: bool) -> Filter | None:
        """The read filter for a scalar type, or ``None``."""
        name = scalar.replace("NullableFilter", "", 1).replace("ReadFilter", "", 1)
        if is_list:
            name += _LIST
        return next((f for f in self.read_filters if f.name == name), None)

    def write_filter(self, scalar: str, is_list: bool) -> Filter | None:
        """The write filter for a scalar type, or ``None``."""
        name = f"{scalar}{_LIST}" if is_list else scalar
        return next((f for f in self.write_filters if f.name == name), None)

    def _build_read_filters(self) -> list[Filter]:
        filters: list[Filter] = []

        for scalar in self.scalars:
            combinations = (
                [scalar + "ListFilter", scalar + "NullableListFilter"],
                [scalar + "Filter", scalar + "NullableFilter"],
            )
            for names in combinations:
                core = self.pick(names)
                if core is None:
                    continue
                name = scalar + _LIST if "ListFilter" in core.name else scalar
                filters.append(Filter(name=name, methods=_convert_all(core)))

        for enum_def in self.enums:
            core = self.pick(
                [f"Enum{enum_def.name}Filter", f"Enum{enum_def.name}NullableFilter"]
            )
            if core is None:
                continue
            filters.append(Filter(name=enum_def.name, methods=_convert_all(core)))

        for model in self.models:
            core = self.pick([model.name + "OrderByRelevanceInput"])
            if core is None:
                continue
            filters.append(Filter(name=model.name, methods=_convert_all(core)))
            model.fields.append(
                AstField(
                    prisma=True,
                    field=dmmf.Field(
                        name="relevance",
                        kind=dmmf.FieldKind.SCALAR,
                        field_type=to_pascal_case(core.name),
                    ),
                )
            )

        return filters

    def _build_write_filters(self) -> list[Filter]:
        filters: list[Filter] = []

        for scalar in self.scalars:
            core = self.pick(
                [
                    scalar + "FieldUpdateOperationsInput",
                    "Nullable" + scalar + "FieldUpdateOperationsInput",
                ]
            )
            if core is None:
                continue
            methods = []
            for outer in core.fields:
                if outer.name == "set":
                    continue
                found = _last_input(outer, ("scalar",), "Null")
                if found is not None:
                    typ, is_list = found
                    methods.append(
                        FilterMethod(
                            name=to_pascal_case(outer.name),
                            action=outer.name,
                            typ=typ,
                            is_list=is_list,
                        )
                    )
            filters.append(Filter(name=scalar, methods=methods))

        for model in self.models:
            for model_field in model.fields:
                core = self.pick([f"{model.name}Update{model_field.name}Input"])
                if core is None:
                    continue
                scalar_name = None
                methods = []
                for outer in core.fields:
                    if outer.name == "set":
                        for input_type in outer.input_types:
                            if input_type.location == "scalar" and input_type.typ != "null":
                                scalar_name = input_type.typ + _LIST
                        continue
                    found = _last_input(outer, ("scalar",), "null")
                    if found is not None:
                        typ, is_list = found
                        methods.append(
                            FilterMethod(
                                name=to_pascal_case(outer.name),
                                action=outer.name,
                                typ=typ,
                                is_list=is_list,
                            )
                        )
                if scalar_name is not None:
                    filters.append(Filter(name=scalar_name, methods=methods))

        return filters