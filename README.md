# prismagen

Building blocks for a Prisma client code generator:

- `prismagen.dmmf` loads the DMMF JSON document into dataclasses (`Document`, `Datamodel`, `Model`, `Field`, `Schema`, `CoreType`, ...). A document without the expected shape raises `DmmfError`, a subclass of `ValueError`.
- `prismagen.ast` builds an `AST` from a `Document`. The `AST` holds the scalar type names, the enums, the models and the read and write filters.
- `prismagen.index` works out the unique indexes of a model. A compound primary key becomes one more index.
- `prismagen.platform` and `prismagen.binaries` detect the host platform. They download the Prisma CLI and engine binaries.

## Installation

```
pip install prismagen
```

## Loading a DMMF document

```python
from prismagen.dmmf import parse_document
from prismagen.ast import AST

with open("dmmf.json", encoding="utf-8") as fh:
    document = parse_document(fh.read())

ast = AST(document)

print(ast.scalars)                      # scalar input type names, first-seen order
for model in ast.models:                # AstModel objects
    print(model.name, [index.name for index in model.indexes])

string_filter = ast.read_filter("String", False)
if string_filter is not None:
    print([(m.name, m.action) for m in string_filter.methods])

int_updates = ast.write_filter("Int", False)
```

`load_document(data)` works like `parse_document` but takes data that is already decoded from JSON into dicts and lists.

`AST.pick(names)` tries each name in `names` in order. It returns the first input object type in the schema with a matching name, or `None` when none matches.

Read filters are built for three things:

- each scalar, with a separate `<Scalar>List` filter for list filters;
- each enum;
- each model that has an `OrderByRelevanceInput` type. Such a model also gets an extra `relevance` field, marked `prisma=True`.

`convert_field` maps filter inputs to method names:

- `in` becomes `InVec`;
- `notIn` becomes `NotInVec`;
- any other input becomes its name in PascalCase;
- `equals` is skipped.

## Fields and models

```python
from prismagen.dmmf import Document

model = document.datamodel.models[0]
field = model.fields[0]
field.required_on_create()              # True when the field must be given on create
field.relation_methods()                # some/every/none for lists, is/is_not otherwise
model.relation_fields_plus_one()        # relation fields plus one default Field
model.indexes()                         # list of prismagen.index.Index

Document.operators()                    # Not, Or, And
Document.read_types()                   # filter methods per scalar type
Document.write_types()                  # atomic update methods for Int and Float
```

`prismagen.index.to_pascal_case("created_at")` returns `"CreatedAt"`. `get_name(field, fields)` returns `field` when it is not empty. Otherwise it joins `fields` in PascalCase.

## Engine binaries

```python
from prismagen.binaries import ENGINES, fetch_native, global_cache_dir
from prismagen.platform import binary_platform_name

print(binary_platform_name())           # e.g. 'debian-openssl-1.1.x', 'darwin', 'windows'
fetch_native(global_cache_dir())
```

`fetch_native` needs an absolute directory; a relative one raises `ValueError`. It downloads the CLI and every engine in `ENGINES`, and skips files that already exist. Each binary is fetched gzip-compressed, decompressed and made executable (except on Windows). On failure it raises `DownloadError`.

On Linux, the platform name is built from two sources:

- the distribution, taken from `/etc/os-release`;
- the OpenSSL series, taken from the output of `openssl version -v`.

If that output is not recognised, `parse_openssl_version` raises `ValueError`.

## What this package does not do

This package has no command-line program. It does not write generated client code: it loads the document and builds the `AST` that such a generator would work from. It also does not run the downloaded binaries.

## Running the tests

```
pip install -e ".[test]"
pytest
```