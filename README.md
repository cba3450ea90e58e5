# apigen

`apigen` has two small parts:

- `apigen.validation` builds dataclass instances from request parameters
  (a mapping of names to strings, as you get from a query string or a form),
  converting and checking each field according to a short rule tag.
- `apigen.binpack` decodes little-endian binary records into dataclasses.

It has no dependencies beyond the standard library.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Parameter validation

Declare a dataclass whose fields are `int` or `str`, and give each field a
rule tag with `param(tag, default=...)`:

```python
from dataclasses import dataclass
from apigen.validation import bind_params, param, ValidationError

@dataclass
class CreateParams:
    login: str = param("required,min=10")
    name: str = param("paramname=full_name")
    status: str = param("enum=user|moderator|admin,default=user")
    age: int = param("min=0,max=128")

bind_params(CreateParams, {"login": "mr.moderator", "age": "32", "full_name": "Ivan"})
# CreateParams(login='mr.moderator', name='Ivan', status='user', age=32)
```

The tag is a comma-separated list of rules:

| rule               | meaning                                                  |
|--------------------|----------------------------------------------------------|
| `required`         | the parameter must be present and non-empty              |
| `paramname=NAME`   | read the value from parameter `NAME` (by default the field name in lower case) |
| `enum=a\|b\|c`     | the value must be one of the listed choices              |
| `default=VALUE`    | value used when the parameter is missing or empty        |
| `min=N`, `max=N`   | bounds on an integer, or on a string's length            |

A missing integer parameter becomes `0`, a missing string `""`. An unknown
rule raises `ValueError`; a field of any type other than `int` or `str`
raises `TypeError`.

A value that breaks a rule raises `ValidationError` (a `ValueError`) with a
message naming the parameter, for example:

- `login must me not empty`
- `login len must be >= 10`
- `age must be int`
- `age must be <= 128`
- `status must be one of [user, moderator, admin]`

Lower-level pieces are available too: `parse_rule(name, kind, tag)` turns a
tag into a `FieldRule`, and `FieldRule.bind(params)` reads, converts and
checks that one field.

## Binary records

`apigen.binpack` reads records laid out as a sequence of fields in
little-endian order: an integer is an unsigned four-byte value, a string is a
four-byte length followed by that many UTF-8 bytes.

Mark a dataclass with `@binpack`, mark fields that are not part of the wire
format with `skip()`, and call `unpack(cls, data)`:

```python
from dataclasses import dataclass
from apigen.binpack import binpack, skip, unpack

@binpack
@dataclass
class Record:
    id: int = 0
    note: str = skip()
    name: str = ""
```

Skipped `int` and `str` fields are set to `0` and `""`. Truncated data,
invalid UTF-8 or a class not marked with `@binpack` raise `BinpackError`.

The module includes a `User` record (`id`, `login` and `flags` packed,
`real_name` skipped). The `apigen-binpack` command decodes a `User` from a
file, from standard input when given `-`, or from a built-in sample when
given nothing:

```
apigen-binpack
# Unpacked user User(id=1123456, real_name='', login='v.romanov', flags=16)
```

On malformed data it prints the error to standard error and exits with
status 1.

## What this package does not do

`apigen` does not route HTTP requests, check HTTP methods or authorisation,
produce JSON responses, or run a server. It validates parameters you have
already taken from a request; serving the request is left to your web
framework.