from capnet.models import ComponentWithDependencies, SourceFile
from capnet.workspace import (
    Scope,
    Workspace,
    get_manipulate_dir_data,
    get_shared_dir,
    load_scope,
    load_workspace_if_exist,
)

from .conftest import make_component


def test_workspace_loads_components_with_workspace_relative_files(workspace_root, add_component):
    add_component(
        "pkg/a",
        sources={"index.js": "a", "lib/util.js": "util"},
        dependencies=["pkg/b@2.0.0"],
    )
    [component] = Workspace(workspace_root).load_components()

    assert str(component.id) == "pkg/a@1.0.0"
    assert [(f.path, f.contents) for f in component.files] == [
        ("src/pkg_a/index.js", "a"),
        ("src/pkg_a/lib/util.js", "util"),
    ]
    assert component.main_file == "src/pkg_a/index.js"
    assert component.spec.dependencies == ["pkg/b@2.0.0"]


def test_file_globs_limit_sources(workspace_root, add_component):
    add_component("a", sources={"index.js": "a", "README.md": "docs"}, files=["*.js"])
    [component] = Workspace(workspace_root).load_components()

    assert [f.path for f in component.files] == ["src/a/index.js"]


def test_invalid_documents_are_skipped(workspace_root, add_component):
    add_component("good")
    (workspace_root / "components" / "broken.yaml").write_text("kind: [unclosed", encoding="utf-8")
    (workspace_root / "components" / "api.yaml").write_text(
        "kind: API\nmetadata:\n  name: x\n", encoding="utf-8"
    )
    (workspace_root / "components" / "nameless.yaml").write_text(
        "kind: Component\nspec: {}\n", encoding="utf-8"
    )

    components = Workspace(workspace_root).load_components()
    assert [c.metadata.name for c in components] == ["good"]


def test_dist_files_are_read_relative_to_dist_dir(workspace_root, add_component):
    add_component("a", distDir="build/a")
    (workspace_root / "build" / "a").mkdir(parents=True)
    (workspace_root / "build" / "a" / "index.js").write_text("compiled", encoding="utf-8")

    [component] = Workspace(workspace_root).load_components()
    assert [(f.path, f.contents) for f in component.dists] == [("index.js", "compiled")]


def test_load_workspace_if_exist(tmp_path, workspace_root):
    assert load_workspace_if_exist(tmp_path / "empty") is None
    assert load_workspace_if_exist(workspace_root).root == workspace_root.resolve()


def test_scope_export_and_load(tmp_path, workspace_root, add_component):
    add_component("pkg/a", dependencies=["pkg/b@1.0.0"])
    add_component("pkg/b")
    components = Workspace(workspace_root).load_components()

    assert load_scope(tmp_path / "scope-home") is None
    Scope(tmp_path / "scope-home").export(components)
    scope = load_scope(tmp_path / "scope-home")

    loaded = {str(c.id): c for c in scope.load_components()}
    assert set(loaded) == {"pkg/a@1.0.0", "pkg/b@1.0.0"}
    assert loaded["pkg/a@1.0.0"].files[0].path == "src/pkg_a/index.js"
    assert loaded["pkg/a@1.0.0"].spec.dependencies == ["pkg/b@1.0.0"]


def test_shared_dir():
    assert get_shared_dir(["src/a/index.js", "src/a/lib/x.js"]) == "src/a"
    assert get_shared_dir(["src/a/index.js"]) == "src/a"
    assert get_shared_dir(["src/a/index.js", "test/a.spec.js"]) is None
    assert get_shared_dir(["index.js"]) is None
    assert get_shared_dir([]) is None


def test_manipulate_dir_data_covers_component_and_dependencies():
    component = make_component("a", dependencies=["b@1.0.0"])
    component.files = [SourceFile(path="src/a/index.js")]
    dependency = make_component("b")
    dependency.files = [SourceFile(path="libs/b/main.js"), SourceFile(path="libs/b/x/y.js")]

    data = get_manipulate_dir_data(
        ComponentWithDependencies(component=component, dependencies=[dependency])
    )
    assert data == {"a@1.0.0": "src/a", "b@1.0.0": "libs/b"}
