"""Per-field Move fragments: struct members, parameters and initialisers."""

from __future__ import annotations

from gutenberg.codegen.move import MoveParam, ascii_string, call, utf8
from gutenberg.models.nft import Field, Fields, FieldType

STRUCT_TYPES: dict[FieldType, str] = {
    FieldType.STRING: "std::string::String",
    FieldType.URL: "sui::url::Url",
    FieldType.ATTRIBUTES: "nft_protocol::attributes::Attributes",
}

ATTRIBUTE_VECTOR = "vector<std::ascii::String>"


def struct_member(field: Field) -> str:
    return f"{field.name}: {STRUCT_TYPES[field.type]},"


def field_params(field: Field) -> list[MoveParam]:
    """Raw constructor parameters for *field*, in signature order."""
    if field.type is FieldType.STRING:
        return [MoveParam(field.name, "std::string::String")]
    if field.type is FieldType.URL:
        return [MoveParam(field.name, "vector<u8>")]
    keys, values = field.params()
    return [MoveParam(keys, ATTRIBUTE_VECTOR), MoveParam(values, ATTRIBUTE_VECTOR)]


def fields_params(fields: Fields) -> list[MoveParam]:
    return [param for field in fields for param in field_params(field)]


def field_init(field: Field) -> str:
    """Expression turning the raw parameters into the struct member value."""
    if field.type is FieldType.STRING:
        return field.name
    if field.type is FieldType.URL:
        return call("sui::url::new_unsafe_from_bytes", [field.name])
    keys, values = field.params()
    return call("nft_protocol::attributes::from_vec", [keys, values])


def struct_literal_member(field: Field) -> str:
    init = field_init(field)
    return f"{field.name}," if init == field.name else f"{field.name}: {init},"


def field_test_args(field: Field) -> list[str]:
    """Fixed argument values used by the generated Move tests."""
    if field.type is FieldType.STRING:
        return [utf8("TEST STRING")]
    if field.type is FieldType.URL:
        return ['b"https://originbyte.io"']
    return [f"vector[{ascii_string('key')}]", f"vector[{ascii_string('attribute')}]"]


def fields_test_args(fields: Fields) -> list[str]:
    return [arg for field in fields for arg in field_test_args(field)]


def display_key(field: Field, fields: Fields) -> str:
    """Display property name; the first URL field is the wallet image."""
    first_url = fields.find(FieldType.URL)
    if (
        first_url is not None
        and field.name == first_url.name
        and "image_url" not in fields.keys()
    ):
        return "image_url"
    return field.name
