from pathlib import Path

from capnet.config import CapsuleOptions, OrchestrationOptions
from capnet.models import ComponentID
from capnet.network import derive_resource_config
from capnet.network.keys import content_hash

COMPONENT = ComponentID.parse("pkg/a@1.0.0")


def test_same_inputs_give_same_directory_and_resource_id():
    options = CapsuleOptions(base_dir=Path("/tmp/x"))
    first = derive_resource_config(COMPONENT, options)
    second = derive_resource_config(COMPONENT, CapsuleOptions(base_dir=Path("/tmp/x")))

    assert first.wrk_dir == second.wrk_dir
    assert first.resource_id == second.resource_id


def test_option_key_order_does_not_change_directory():
    first = CapsuleOptions.model_validate(
        {"base_dir": "/tmp/x", "install_packages": True, "write_config": False}
    )
    second = CapsuleOptions.model_validate(
        {"write_config": False, "base_dir": "/tmp/x"}
    )
    assert (
        derive_resource_config(COMPONENT, first).wrk_dir
        == derive_resource_config(COMPONENT, second).wrk_dir
    )


def test_different_options_give_different_directory():
    first = derive_resource_config(COMPONENT, CapsuleOptions(base_dir=Path("/tmp/x")))
    second = derive_resource_config(
        COMPONENT, CapsuleOptions(base_dir=Path("/tmp/x"), write_dists=False)
    )
    assert first.wrk_dir != second.wrk_dir


def test_directory_layout_and_resource_id_format():
    options = CapsuleOptions(base_dir=Path("/tmp/x"))
    config = derive_resource_config(COMPONENT, options)

    assert config.wrk_dir.parent == Path("/tmp/x")
    assert config.wrk_dir.name == f"pkg_a@1.0.0_{content_hash(options.canonical_json())}"
    assert config.resource_id == f"pkg/a@1.0.0_{content_hash(str(config.wrk_dir))}"
    assert config.component_id == COMPONENT


def test_always_new_gives_fresh_directory_each_call():
    options = CapsuleOptions(base_dir=Path("/tmp/x"))
    fresh = OrchestrationOptions(always_new=True)
    first = derive_resource_config(COMPONENT, options, fresh)
    second = derive_resource_config(COMPONENT, options, fresh)

    assert first.wrk_dir != second.wrk_dir
    assert first.resource_id != second.resource_id


def test_name_overrides_hash_regardless_of_other_options():
    named = OrchestrationOptions(name="ci-run")
    first = derive_resource_config(
        COMPONENT, CapsuleOptions(base_dir=Path("/tmp/x")), named
    )
    second = derive_resource_config(
        COMPONENT,
        CapsuleOptions(base_dir=Path("/tmp/x"), write_dists=False, verbose=True),
        named,
    )

    assert first.wrk_dir == second.wrk_dir == Path("/tmp/x/pkg_a@1.0.0_ci-run")
    assert first.resource_id == second.resource_id


def test_same_name_under_different_base_dirs_gets_distinct_resource_ids():
    named = OrchestrationOptions(name="shared")
    first = derive_resource_config(COMPONENT, CapsuleOptions(base_dir=Path("/tmp/x")), named)
    second = derive_resource_config(COMPONENT, CapsuleOptions(base_dir=Path("/tmp/y")), named)

    assert first.wrk_dir.name == second.wrk_dir.name
    assert first.resource_id != second.resource_id


def test_extra_values_are_part_of_the_capsule_key():
    plain = CapsuleOptions(base_dir=Path("/tmp/x"))
    tagged = plain.merged({"extra": {"registry": "https://example.test"}})

    assert tagged.extra == {"registry": "https://example.test"}
    assert (
        derive_resource_config(COMPONENT, plain).wrk_dir
        != derive_resource_config(COMPONENT, tagged).wrk_dir
    )
