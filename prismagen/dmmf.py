"""The data model meta format document produced by the schema engine."""

from __future__ import annotations

import copy
import enum
import json
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .index import Index, model_indexes

T = TypeVar("T")


class DmmfError(ValueError):
    """Raised when a document does not have the expected shape."""


class FieldKind(str, enum.Enum):
    """Kind of a model field in the data model."""

    SCALAR = "scalar"
    OBJECT = "object"
    ENUM = "enum"

    def include_in_struct(self) -> bool:
        return self in (FieldKind.SCALAR, FieldKind.ENUM)

    def is_relation(self) -> bool:
        return self is FieldKind.OBJECT


class DatamodelFieldKind(str, enum.Enum):
    """Kind of a field as named by the data model itself."""

    SCALAR = "scalar"
    RELATION = "relation"
    ENUM = "enum"

    def include_in_struct(self) -> bool:
        return self in (DatamodelFieldKind.SCALAR, DatamodelFieldKind.ENUM)

    def relation(self) -> bool:
        return self is DatamodelFieldKind.RELATION


@dataclass
class Operator:
    name: str
    action: str


@dataclass
class Action:
    type_name: str
    name: str


@dataclass
class ActionType:
    name: str
    inner_name: str
    list: bool
    return_list: bool


@dataclass
class Method:
    name: str
    action: str


@dataclass
class Type:
    name: str = ""
    methods: list[Method] = field(default_factory=list)


@dataclass
class SchemaEnum:
    name: str
    values: list[str]
    db_name: str | None = None


@dataclass
class EnumValue:
    name: str
    db_name: str | None = None


@dataclass
class Enum:
    name: str
    values: list[EnumValue]
    db_name: str | None = None


@dataclass
class UniqueIndex:
    fields: list[str]
    internal_name: str = ""


@dataclass
class PrimaryKey:
    fields: list[str]
    name: str | None = None


@dataclass
class RelationMethod:
    name: str
    action: str


@dataclass
class Field:
    """A field of a model in the data model."""

    kind: FieldKind = FieldKind.SCALAR
    name: str = ""
    is_list: bool = False
    is_required: bool = False
    is_unique: bool = False
    is_id: bool = False
    is_read_only: bool = False
    field_type: str = ""
    has_default_value: bool = False
    default: Any = None
    relation_name: str = ""
    relation_from_fields: list[str] | None = None
    relation_to_fields: list[str] | None = None
    relation_on_delete: str | None = None
    is_generated: bool | None = None
    is_updated_at: bool = False
    documentation: str | None = None

    def required_on_create(self) -> bool:
        """Whether a value must be given for this field when creating a record."""
        if (
            not self.is_required
            or self.is_updated_at
            or self.has_default_value
            or self.is_read_only
        ):
            return False
        return not (self.relation_name and self.is_list)

    def relation_methods(self) -> list[RelationMethod]:
        """Filter methods available on this field as a relation."""
        if self.is_list:
            return [
                RelationMethod(name="some", action="some"),
                RelationMethod(name="every", action="every"),
                RelationMethod(name="none", action="none"),
            ]
        return [
            RelationMethod(name="is", action="is"),
            RelationMethod(name="is_not", action="isNot"),
        ]


@dataclass
class Model:
    """A model of the data model."""

    name: str
    fields: list[Field]
    unique_fields: list[list[str]]
    unique_indexes: list[UniqueIndex]
    db_name: str | None = None
    is_generated: bool | None = None
    documentation: str | None = None
    primary_key: PrimaryKey | None = None

    def relation_fields_plus_one(self) -> list[Field]:
        """Copies of the relation fields followed by one default field."""
        fields = [copy.deepcopy(f) for f in self.fields if f.kind.is_relation()]
        fields.append(Field())
        return fields

    def indexes(self) -> list[Index]:
        return model_indexes(self)


@dataclass
class Datamodel:
    models: list[Model]
    enums: list[Enum]


@dataclass
class SchemaInputType:
    is_list: bool
    typ: str
    location: str
    is_required: bool | None = None
    kind: FieldKind = FieldKind.SCALAR
    namespace: str = ""


@dataclass
class SchemaOutputType:
    type_: str
    is_list: bool
    is_required: bool | None = None


@dataclass
class SchemaField:
    name: str
    output_type: SchemaOutputType


@dataclass
class OuterInputType:
    name: str
    input_types: list[SchemaInputType]
    is_relation_filter: bool | None = None


@dataclass
class OutputType:
    name: str
    fields: list[SchemaField]
    is_embedded: bool | None = None


@dataclass
class SchemaArg:
    name: str
    input_types: list[SchemaInputType]
    is_relation_filter: bool | None = None


@dataclass
class CoreType:
    name: str
    fields: list[OuterInputType]
    is_where_type: bool | None = None
    is_order_type: bool | None = None
    at_least_one: bool | None = None
    at_most_one: bool | None = None


@dataclass
class InputObjectType:
    prisma: list[CoreType]


@dataclass
class OutputObjectType:
    prisma: list[OutputType]


@dataclass
class EnumTypes:
    prisma: list[SchemaEnum]
    model: list[SchemaEnum] = field(default_factory=list)


@dataclass
class Schema:
    input_object_types: InputObjectType
    output_object_types: OutputObjectType
    enum_types: EnumTypes


@dataclass
class Document:
    """A whole document: the data model and the query schema."""

    datamodel: Datamodel
    schema: Schema

    @staticmethod
    def operators() -> list[Operator]:
        return [
            Operator(name="Not", action="NOT"),
            Operator(name="Or", action="OR"),
            Operator(name="And", action="AND"),
        ]

    @staticmethod
    def variations() -> list[ActionType]:
        return [
            ActionType(name="Unique", inner_name="One", list=False, return_list=False),
            ActionType(name="First", inner_name="One", list=True, return_list=False),
            ActionType(name="Many", inner_name="Many", list=True, return_list=True),
        ]

    @staticmethod
    def actions() -> list[Action]:
        return [
            Action(type_name="query", name="Find"),
            Action(type_name="mutation", name="Create"),
            Action(type_name="mutation", name="Update"),
            Action(type_name="mutation", name="Delete"),
        ]

    @staticmethod
    def write_types() -> list[Type]:
        def number() -> list[Method]:
            return [
                Method(name="Increment", action="increment"),
                Method(name="Decrement", action="decrement"),
                Method(name="Multiply", action="multiply"),
                Method(name="Divide", action="divide"),
            ]

        return [Type(name="Int", methods=number()), Type(name="Float", methods=number())]

    @staticmethod
    def read_types() -> list[Type]:
        def number() -> list[Method]:
            return [
                Method(name="LT", action="lt"),
                Method(name="GT", action="gt"),
                Method(name="LTE", action="lte"),
                Method(name="GTE", action="gte"),
            ]

        return [
            Type(
                name="String",
                methods=[
                    Method(name="Contains", action="contains"),
                    Method(name="HasPrefix", action="starts_with"),
                    Method(name="HasSuffix", action="ends_with"),
                ],
            ),
            Type(name="Boolean", methods=[]),
            Type(name="Int", methods=number()),
            Type(name="Float", methods=number()),
            Type(
                name="DateTime",
                methods=[
                    Method(name="Before", action="lt"),
                    Method(name="After", action="gt"),
                    Method(name="BeforeEquals", action="lte"),
                    Method(name="AfterEquals", action="gte"),
                ],
            ),
        ]


_MISSING = object()


def _obj(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DmmfError(f"expected an object for {what}")
    return data


def _check(key: str, value: Any, kind: type) -> Any:
    if not isinstance(value, kind):
        raise DmmfError(f"invalid type for field `{key}`: expected {kind.__name__}")
    return value


def _req(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise DmmfError(f"missing field `{key}`")
    return _check(key, data[key], kind)


def _opt(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    return None if value is None else _check(key, value, kind)


def _default(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    if key not in data:
        return default
    return _check(key, data[key], kind)


def _strings(key: str, value: list[Any]) -> list[str]:
    return [_check(key, item, str) for item in value]


def _items(data: dict[str, Any], key: str, loader: Callable[[Any], T]) -> list[T]:
    return [loader(item) for item in _req(data, key, list)]


def _kind(data: dict[str, Any], key: str, default: Any = _MISSING) -> FieldKind:
    if key not in data and default is not _MISSING:
        return default
    value = _req(data, key, str)
    try:
        return FieldKind(value)
    except ValueError:
        raise DmmfError(f"unknown field kind `{value}`") from None


def _load_field(data: Any) -> Field:
    d = _obj(data, "field")
    from_fields = _opt(d, "relationFromFields", list)
    to_fields = _opt(d, "relationToFields", list)
    return Field(
        kind=_kind(d, "kind"),
        name=_req(d, "name", str),
        is_list=_req(d, "isList", bool),
        is_required=_req(d, "isRequired", bool),
        is_unique=_req(d, "isUnique", bool),
        is_id=_req(d, "isId", bool),
        is_read_only=_req(d, "isReadOnly", bool),
        field_type=_req(d, "type", str),
        has_default_value=_req(d, "hasDefaultValue", bool),
        default=d.get("default"),
        relation_name=_default(d, "relationName", str, ""),
        relation_from_fields=None if from_fields is None else _strings("relationFromFields", from_fields),
        relation_to_fields=None if to_fields is None else _strings("relationToFields", to_fields),
        relation_on_delete=_opt(d, "relationOnDelete", str),
        is_generated=_opt(d, "isGenerated", bool),
        is_updated_at=_req(d, "isUpdatedAt", bool),
        documentation=_opt(d, "documentation", str),
    )


def _load_unique_index(data: Any) -> UniqueIndex:
    d = _obj(data, "unique index")
    return UniqueIndex(
        fields=_strings("fields", _req(d, "fields", list)),
        internal_name=_default(d, "internalName", str, ""),
    )


def _load_primary_key(data: Any) -> PrimaryKey:
    d = _obj(data, "primary key")
    return PrimaryKey(
        fields=_strings("fields", _req(d, "fields", list)),
        name=_opt(d, "name", str),
    )


def _load_model(data: Any) -> Model:
    d = _obj(data, "model")
    primary_key = d.get("primaryKey")
    return Model(
        name=_req(d, "name", str),
        fields=_items(d, "fields", _load_field),
        unique_fields=[
            _strings("uniqueFields", _check("uniqueFields", group, list))
            for group in _req(d, "uniqueFields", list)
        ],
        unique_indexes=_items(d, "uniqueIndexes", _load_unique_index),
        db_name=_opt(d, "dbName", str),
        is_generated=_opt(d, "isGenerated", bool),
        documentation=_opt(d, "documentation", str),
        primary_key=None if primary_key is None else _load_primary_key(primary_key),
    )


def _load_enum_value(data: Any) -> EnumValue:
    d = _obj(data, "enum value")
    return EnumValue(name=_req(d, "name", str), db_name=_opt(d, "dbName", str))


def _load_enum(data: Any) -> Enum:
    d = _obj(data, "enum")
    return Enum(
        name=_req(d, "name", str),
        values=_items(d, "values", _load_enum_value),
        db_name=_opt(d, "dbName", str),
    )


def _load_datamodel(data: Any) -> Datamodel:
    d = _obj(data, "datamodel")
    return Datamodel(models=_items(d, "models", _load_model), enums=_items(d, "enums", _load_enum))


def _load_input_type(data: Any) -> SchemaInputType:
    d = _obj(data, "input type")
    return SchemaInputType(
        is_list=_req(d, "isList", bool),
        typ=_req(d, "type", str),
        location=_req(d, "location", str),
        is_required=_opt(d, "isRequired", bool),
        kind=_kind(d, "kind", FieldKind.SCALAR),
        namespace=_default(d, "namespace", str, ""),
    )


def _load_outer_input_type(data: Any) -> OuterInputType:
    d = _obj(data, "input field")
    return OuterInputType(
        name=_req(d, "name", str),
        input_types=_items(d, "inputTypes", _load_input_type),
        is_relation_filter=_opt(d, "isRelationFilter", bool),
    )


def _load_core_type(data: Any) -> CoreType:
    d = _obj(data, "input object type")
    return CoreType(
        name=_req(d, "name", str),
        fields=_items(d, "fields", _load_outer_input_type),
        is_where_type=_opt(d, "isWhereType", bool),
        is_order_type=_opt(d, "isOrderType", bool),
        at_least_one=_opt(d, "atLeastOne", bool),
        at_most_one=_opt(d, "atMostOne", bool),
    )


def _load_output_field_type(data: Any) -> SchemaOutputType:
    d = _obj(data, "output type")
    return SchemaOutputType(
        type_=_req(d, "type", str),
        is_list=_req(d, "isList", bool),
        is_required=_opt(d, "isRequired", bool),
    )


def _load_schema_field(data: Any) -> SchemaField:
    d = _obj(data, "output field")
    return SchemaField(
        name=_req(d, "name", str),
        output_type=_load_output_field_type(_req(d, "outputType", dict)),
    )


def _load_output_type(data: Any) -> OutputType:
    d = _obj(data, "output object type")
    return OutputType(
        name=_req(d, "name", str),
        fields=_items(d, "fields", _load_schema_field),
        is_embedded=_opt(d, "isEmbedded", bool),
    )


def _load_schema_enum(data: Any) -> SchemaEnum:
    d = _obj(data, "schema enum")
    return SchemaEnum(
        name=_req(d, "name", str),
        values=_strings("values", _req(d, "values", list)),
        db_name=_opt(d, "dBName", str),
    )


def _load_schema(data: Any) -> Schema:
    d = _obj(data, "schema")
    inputs = _req(d, "inputObjectTypes", dict)
    outputs = _req(d, "outputObjectTypes", dict)
    enums = _req(d, "enumTypes", dict)
    return Schema(
        input_object_types=InputObjectType(prisma=_items(inputs, "prisma", _load_core_type)),
        output_object_types=OutputObjectType(prisma=_items(outputs, "prisma", _load_output_type)),
        enum_types=EnumTypes(
            prisma=_items(enums, "prisma", _load_schema_enum),
            model=[_load_schema_enum(e) for e in _default(enums, "model", list, [])],
        ),
    )


def load_document(data: Any) -> Document:
    """Build a :class:`Document` from already decoded JSON data."""
    d = _obj(data, "document")
    return Document(
        datamodel=_load_datamodel(_req(d, "datamodel", dict)),
        schema=_load_schema(_req(d, "schema", dict)),
    )


def parse_document(text: str | bytes) -> Document:
    """Parse a JSON document into a :class:`Document`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DmmfError(f"invalid JSON: {exc}") from exc
    return load_document(data)