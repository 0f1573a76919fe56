import json
from pathlib import Path

from capnet.capsule import CapsulePaths
from capnet.config import CapsuleOptions
from capnet.models import ComponentWithDependencies, SourceFile
from capnet.workspace import LinkGenerator, ManyComponentsWriter, component_package_name

from .conftest import make_component


def with_files(component, *paths, main="index.js"):
    component.files = [SourceFile(path=path, contents=path) for path in paths]
    component.main_file = main
    return component


def files_of(component) -> dict[str, str]:
    return {f.path: f.contents for f in component.files_to_persist.files}


def test_package_name():
    a = make_component("pkg/a").id
    assert component_package_name(a) == "@capnet/pkg.a"
    assert component_package_name(a, exclude_registry_prefix=True) == "pkg.a"
    assert component_package_name(make_component("@scope/ui").id) == "@capnet/scope.ui"


def test_links_point_at_dependency_main_file():
    app = make_component("app")
    lib = with_files(make_component("lib", "2.0.0"), "main.js", main="main.js")
    paths = CapsulePaths((lib.id, Path("/capsules/lib")))

    links = LinkGenerator().compute_links(app, [lib], paths)

    assert [f.path for f in links.files] == ["node_modules/@capnet/lib/index.js"]
    assert 'require("/capsules/lib/main.js")' in links.files[0].contents
    assert links.files[0].contents.startswith("// linked to lib@2.0.0\n")


def test_links_skip_self_and_dependencies_without_capsule():
    app = make_component("app")
    lib = make_component("lib")
    paths = CapsulePaths((app.id, Path("/capsules/app")))

    links = LinkGenerator().compute_links(app, [app, lib], paths)
    assert links.files == []


def test_npm_link_files_add_manifest():
    lib = make_component("lib", "2.0.0")
    paths = CapsulePaths((lib.id, Path("/capsules/lib")))

    links = LinkGenerator(exclude_registry_prefix=True).compute_links(
        make_component("app"), [lib], paths, create_npm_link_files=True
    )

    manifest = json.loads(links.files[1].contents)
    assert links.files[1].path == "node_modules/lib/package.json"
    assert manifest == {"name": "lib", "version": "2.0.0", "main": "index.js"}


def test_writer_populates_sources_dists_and_manifest():
    app = with_files(
        make_component(
            "app",
            packageDependencies={"lodash": "^4.17.0"},
            dependencies=["lib@1.0.0"],
            testerDependencies=["jest-env@1.0.0"],
        ),
        "index.js",
        "lib/util.js",
    )
    app.dists = [SourceFile(path="index.js", contents="compiled")]
    lib = make_component("lib")
    jest_env = make_component("jest-env")
    cwd = ComponentWithDependencies(
        component=app, dependencies=[lib], tester_dependencies=[jest_env]
    )
    paths = CapsulePaths((lib.id, Path("/c/lib")), (jest_env.id, Path("/c/jest")))

    writer = ManyComponentsWriter([cwd], CapsuleOptions(), paths)
    assert writer.populate_components_files_to_write() == [app]

    files = files_of(app)
    assert files["index.js"] == "index.js"
    assert files["lib/util.js"] == "lib/util.js"
    assert files["dist/index.js"] == "compiled"
    assert json.loads(files["package.json"]) == {
        "name": "@capnet/app",
        "version": "1.0.0",
        "main": "index.js",
        "dependencies": {"lodash": "^4.17.0", "@capnet/lib": "file:/c/lib"},
        "devDependencies": {"@capnet/jest-env": "file:/c/jest"},
    }
    assert "capnet.component.yaml" not in files


def test_writer_respects_disabled_options():
    app = with_files(make_component("app", dependencies=["lib@1.0.0"]), "index.js")
    app.dists = [SourceFile(path="index.js", contents="compiled")]
    lib = make_component("lib")
    options = CapsuleOptions(write_dists=False, write_bit_dependencies=False)

    writer = ManyComponentsWriter(
        [ComponentWithDependencies(component=app, dependencies=[lib])],
        options,
        CapsulePaths((lib.id, Path("/c/lib"))),
    )
    writer.populate_components_files_to_write()

    files = files_of(app)
    assert "dist/index.js" not in files
    manifest = json.loads(files["package.json"])
    assert manifest["dependencies"] == {}
    assert "devDependencies" not in manifest


def test_unversioned_component_manifest():
    app = make_component("app", version=None)
    writer = ManyComponentsWriter([ComponentWithDependencies(component=app)], CapsuleOptions())

    assert writer.package_json(ComponentWithDependencies(component=app))["version"] == "0.0.0"


def test_writer_relocates_under_write_to_path():
    app = with_files(make_component("app"), "index.js")
    writer = ManyComponentsWriter(
        [ComponentWithDependencies(component=app)],
        CapsuleOptions(write_config=True),
        write_to_path="out",
    )
    writer.populate_components_files_to_write()

    assert sorted(files_of(app)) == [
        "out/capnet.component.yaml",
        "out/index.js",
        "out/package.json",
    ]
