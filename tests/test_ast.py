import pytest

from prismagen import dmmf
from prismagen.ast import (
    AST,
    AstField,
    FilterMethod,
    collect_enums,
    collect_models,
    collect_scalars,
    convert_field,
)


def it(typ, location="scalar", is_list=False):
    return dmmf.SchemaInputType(is_list=is_list, typ=typ, location=location)


def outer(name, *types):
    return dmmf.OuterInputType(name=name, input_types=list(types))


def core(name, *fields):
    return dmmf.CoreType(name=name, fields=list(fields))


def model(name, fields=(), unique_indexes=()):
    return dmmf.Model(
        name=name,
        fields=list(fields),
        unique_fields=[],
        unique_indexes=list(unique_indexes),
    )


def make_doc(input_types=(), models=(), enums=()):
    return dmmf.Document(
        datamodel=dmmf.Datamodel(models=list(models), enums=[]),
        schema=dmmf.Schema(
            input_object_types=dmmf.InputObjectType(prisma=list(input_types)),
            output_object_types=dmmf.OutputObjectType(prisma=[]),
            enum_types=dmmf.EnumTypes(prisma=[], model=list(enums)),
        ),
    )


@pytest.fixture
def document():
    return make_doc(
        input_types=[
            core(
                "StringFilter",
                outer("equals", it("String")),
                outer("in", it("String", is_list=True)),
                outer("notIn", it("String", is_list=True)),
                outer("contains", it("String")),
            ),
            core("StringNullableListFilter", outer("has", it("String"), it("Null"))),
            core("EnumRoleFilter", outer("equals", it("Role", "enumTypes"))),
            core(
                "IntFieldUpdateOperationsInput",
                outer("set", it("Int")),
                outer("increment", it("Int")),
            ),
            core("PostOrderByRelevanceInput", outer("search", it("String"))),
            core(
                "PostUpdatetagsInput",
                outer("set", it("String", is_list=True)),
                outer("push", it("String")),
            ),
            core("WhereInput", outer("author", it("UserWhereInput", "inputObjectTypes"))),
        ],
        models=[
            model(
                "Post",
                fields=[
                    dmmf.Field(name="title", field_type="String"),
                    dmmf.Field(name="tags", field_type="String", is_list=True),
                ],
                unique_indexes=[dmmf.UniqueIndex(fields=["title", "tags"])],
            )
        ],
        enums=[dmmf.SchemaEnum(name="Role", values=["USER", "ADMIN"])],
    )


def test_collect_scalars_dedups_and_skips_other_locations(document):
    scalars = collect_scalars(document)
    assert scalars == ["String", "Null", "Int"]
    assert "UserWhereInput" not in scalars


def test_collect_enums_copies_values(document):
    enums = collect_enums(document)
    assert [(e.name, e.values) for e in enums] == [("Role", ["USER", "ADMIN"])]
    enums[0].values.append("X")
    assert document.schema.enum_types.model[0].values == ["USER", "ADMIN"]


def test_collect_models_wraps_fields(document):
    models = collect_models(document)
    assert [m.name for m in models] == ["Post"]
    first = models[0].fields[0]
    assert first.prisma is False
    assert first.name == "title"
    assert first.field_type == "String"
    assert models[0].indexes[0].internal_name == "title_tags"
    assert models[0].source_model.name == "Post"


def test_ast_field_delegation_missing_attribute():
    wrapped = AstField(prisma=False, field=dmmf.Field(name="title", is_list=True))
    assert wrapped.name == "title"
    assert wrapped.is_list is True
    with pytest.raises(AttributeError):
        _ = wrapped.does_not_exist


def test_convert_field_equals_is_skipped():
    assert convert_field(outer("equals", it("String"))) is None


def test_convert_field_reserved_names():
    assert convert_field(outer("in", it("String", is_list=True))) == FilterMethod(
        name="InVec", action="in", is_list=True, typ="String"
    )
    assert convert_field(outer("notIn", it("Int", is_list=True))).name == "NotInVec"


def test_convert_field_only_null_or_objects_gives_none():
    assert convert_field(outer("lt", it("Null"))) is None
    assert convert_field(outer("is", it("UserWhereInput", "inputObjectTypes"))) is None


def test_convert_field_last_matching_input_wins():
    method = convert_field(
        outer("has", it("Int"), it("Role", "enumTypes", is_list=True), it("Null"))
    )
    assert method.typ == "Role"
    assert method.is_list is True
    assert method.action == "has"


def test_pick_respects_name_order(document):
    ast = AST(document)
    picked = ast.pick(["Missing", "EnumRoleFilter", "StringFilter"])
    assert picked.name == "EnumRoleFilter"
    assert ast.pick(["Missing"]) is None
    assert ast.pick([]) is None


def test_read_filters_for_scalars(document):
    ast = AST(document)
    plain = ast.read_filter("String", False)
    assert [m.action for m in plain.methods] == ["in", "notIn", "contains"]
    assert [m.name for m in plain.methods][:2] == ["InVec", "NotInVec"]
    listed = ast.read_filter("String", True)
    assert listed.name == "String" + "List"
    assert [m.action for m in listed.methods] == ["has"]


def test_read_filter_strips_suffixes(document):
    ast = AST(document)
    assert ast.read_filter("StringNullableFilter", False) is ast.read_filter("String", False)
    assert ast.read_filter("StringReadFilter", False) is ast.read_filter("String", False)
    assert ast.read_filter("Int", False) is None


def test_enum_read_filter(document):
    ast = AST(document)
    role = ast.read_filter("Role", False)
    assert role.methods == []
    assert role.name == "Role"


def test_relevance_field_added(document):
    ast = AST(document)
    post = ast.models[0]
    relevance = post.fields[-1]
    assert relevance.prisma is True
    assert relevance.name == "relevance"
    assert relevance.kind is dmmf.FieldKind.SCALAR
    assert relevance.field_type == "PostOrderByRelevanceInput"
    assert [m.action for m in ast.read_filter("Post", False).methods] == ["search"]
    assert len(document.datamodel.models[0].fields) == 2


def test_write_filter_for_scalar(document):
    ast = AST(document)
    int_filter = ast.write_filter("Int", False)
    assert [(m.name, m.action, m.typ) for m in int_filter.methods] == [
        ("Increment", "increment", "Int")
    ]
    assert ast.write_filter("Float", False) is None


def test_write_filter_for_list_field(document):
    ast = AST(document)
    list_filter = ast.write_filter("String", True)
    assert list_filter.name == "String" + "List"
    assert [(m.action, m.typ, m.is_list) for m in list_filter.methods] == [
        ("push", "String", False)
    ]


def test_empty_document_builds_empty_ast():
    ast = AST(make_doc())
    assert ast.scalars == []
    assert ast.enums == []
    assert ast.models == []
    assert ast.read_filters == []
    assert ast.write_filters == []
    assert ast.order_bys == []