from sdkgen.render.templates import ArtifactContext
from sdkgen.settings import GeneratorSettings
from tests.utils import database_spec, network_spec


def test_context_defaults_to_unit_callback_type():
    context = ArtifactContext.create(network_spec(), GeneratorSettings())
    assert context.cb_type == "()"
    assert context.ok_match_arm == 'Ok(()) => "".to_string()'
    assert context.db_return_type == "()"


def test_context_uses_wildcard_ok_arm_for_values():
    context = ArtifactContext.create(network_spec(return_type="Vec<FriendInfo>"), GeneratorSettings())
    assert context.cb_type == "Vec<FriendInfo>"
    assert context.ok_match_arm == 'Ok(_) => "".to_string()'


def test_context_db_return_type_follows_settings():
    settings = GeneratorSettings(db_default_return_type="bool")
    assert ArtifactContext.create(database_spec(), settings).db_return_type == "bool"
    assert ArtifactContext.create(database_spec(return_type="i64"), settings).db_return_type == "i64"


def test_context_request_struct_without_embedded_params():
    context = ArtifactContext.create(network_spec(function_params="user_id: &str"), GeneratorSettings())
    assert context.struct_fields == "    pb_req: PbSetStatusRequest,\n    cb: CB,"
    assert context.new_params == "pb_req: PbSetStatusRequest, cb: CB"
    assert context.field_init == "Self { pb_req, cb }"
    assert context.request_new_args == "pb_req, cb"


def test_context_request_struct_with_embedded_params():
    spec = network_spec(function_params="user_id: &str, name: String, count: i32", pass_params_to_request=True)
    context = ArtifactContext.create(spec, GeneratorSettings())
    assert context.struct_fields == (
        "    pb_req: PbSetStatusRequest,\n"
        "    cb: CB,\n"
        "    user_id: String,\n"
        "    name: String,\n"
        "    count: i32,"
    )
    assert context.new_params == "pb_req: PbSetStatusRequest, cb: CB, user_id: &str, name: String, count: i32"
    assert context.field_init == "Self { pb_req, cb, user_id: user_id.to_string(), name, count }"
    assert context.request_new_args == "pb_req, cb, user_id, name.to_string(), count"


def test_context_test_section_and_call_prefix():
    context = ArtifactContext.create(database_spec(), GeneratorSettings())
    assert context.test_section == 'let target_id: &str = "test";\n        let count: i32 = 0;\n        '
    assert context.test_call_prefix == "target_id, count, "
    assert context.owned_rebindings == "    let target_id = target_id.to_string();\n"


def test_context_module_name_from_settings():
    context = ArtifactContext.create(network_spec(), GeneratorSettings(module_name="friends"))
    assert context.module_name == "friends"
    assert context.build_args == "status, cb"
