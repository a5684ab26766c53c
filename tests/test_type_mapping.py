from sdkgen.type_mapping import get_java_type_map, java_type_to_rust_type


def test_java_type_map_contains_expected_entries():
    mapping = get_java_type_map()
    assert mapping["String"] == "&str"
    assert mapping["int"] == "i32"
    assert mapping["boolean"] == "bool"
    assert len(mapping) == 9


def test_scalar_types():
    assert java_type_to_rust_type("String") == "&str"
    assert java_type_to_rust_type("long") == "i64"
    assert java_type_to_rust_type("short") == "i16"
    assert java_type_to_rust_type("byte") == "i8"
    assert java_type_to_rust_type("float") == "f32"
    assert java_type_to_rust_type("double") == "f64"
    assert java_type_to_rust_type("char") == "char"


def test_array_element_keeps_ownership():
    assert java_type_to_rust_type("String[]") == "Vec<String>"
    assert java_type_to_rust_type("int[]") == "Vec<i32>"
    assert java_type_to_rust_type("ConversationType[]") == "Vec<ConversationType>"


def test_unknown_types_pass_through():
    assert java_type_to_rust_type("ConversationType") == "ConversationType"
    assert java_type_to_rust_type(" SearchParams ") == "SearchParams"
