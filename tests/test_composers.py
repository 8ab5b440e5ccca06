"""
Tests for the single-package composers.

Tests for:
- compose_action / compose_actions
- compose_sequences
- compose_package
- compose_triggers
- compose_rules
- compose_dependencies
- compose_api_records
"""

import base64
import logging

import pytest

from wskcompose.errors import FileReadError, InvalidRuntimeError, UnknownDependencyTypeError
from wskcompose.parsers.composers import (
    compose_action,
    compose_actions,
    compose_api_records,
    compose_dependencies,
    compose_package,
    compose_rules,
    compose_sequences,
    compose_triggers,
    qualify_action_name,
)
from wskcompose.schemas.manifest import ActionSpec, PackageSpec, SequenceSpec
from wskcompose.whisk.entities import KeyValue, get_value, to_dict

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def managed():
    """A managed annotation as the aggregator would build it."""
    return KeyValue(
        key="whisk-managed",
        value={"__OW_PROJECT_NAME": "demo", "__OW_PROJECT_HASH": "abc", "__OW_FILE": "manifest.yaml"},
    )


# =============================================================================
# Action Composer Tests
# =============================================================================


class TestComposeActionSource:
    """Tests for packaging and runtime inference."""

    def test_js_file(self, write_file, manifest_path, hello_js):
        """A .js file is shipped as text with the default node kind."""
        write_file("src/hello.js", hello_js)

        record = compose_action(manifest_path, "hello", ActionSpec(function="src/hello.js"), "greetings")

        assert record.action.name == "hello"
        assert record.action.exec.kind == "nodejs:10"
        assert record.action.exec.code == hello_js
        assert record.action.exec.binary is None
        assert record.package_name == "greetings"
        assert record.filepath.endswith("src/hello.js")

    def test_deprecated_location(self, write_file, manifest_path):
        write_file("src/hello.py", "def main(args):\n    return args\n")

        record = compose_action(manifest_path, "hello", ActionSpec(location="src/hello.py"), "p")

        assert record.action.exec.kind == "python:3"

    def test_unknown_extension_without_runtime(self, write_file, manifest_path):
        write_file("src/hello.txt", "text\n")

        with pytest.raises(InvalidRuntimeError) as exc_info:
            compose_action(manifest_path, "hello", ActionSpec(function="src/hello.txt"), "p")

        assert exc_info.value.file_name == "hello.txt"
        assert exc_info.value.action == "hello"
        assert "nodejs:10" in exc_info.value.supported

    def test_missing_file(self, manifest_path):
        with pytest.raises(FileReadError):
            compose_action(manifest_path, "hello", ActionSpec(function="src/missing.js"), "p")

    def test_zip_without_runtime(self, write_file, manifest_path):
        write_file("dist/hello.zip", b"PK\x05\x06" + b"\x00" * 18)

        with pytest.raises(InvalidRuntimeError):
            compose_action(manifest_path, "hello", ActionSpec(function="dist/hello.zip"), "p")

    def test_zip_with_runtime(self, write_file, manifest_path):
        content = b"PK\x05\x06" + b"\x00" * 18
        write_file("dist/hello.zip", content)

        record = compose_action(
            manifest_path, "hello", ActionSpec(function="dist/hello.zip", runtime="python:3"), "p"
        )

        assert record.action.exec.kind == "python:3"
        assert record.action.exec.binary is True
        assert base64.b64decode(record.action.exec.code) == content

    def test_zip_with_unsupported_runtime(self, write_file, manifest_path):
        write_file("dist/hello.zip", b"PK\x05\x06" + b"\x00" * 18)

        with pytest.raises(InvalidRuntimeError):
            compose_action(
                manifest_path, "hello", ActionSpec(function="dist/hello.zip", runtime="cobol:1"), "p"
            )

    def test_jar_is_binary(self, write_file, manifest_path):
        write_file("lib/hello.jar", b"\xca\xfe\xba\xbe")

        record = compose_action(manifest_path, "hello", ActionSpec(function="lib/hello.jar"), "p")

        assert record.action.exec.kind == "java"
        assert record.action.exec.binary is True
        assert base64.b64decode(record.action.exec.code) == b"\xca\xfe\xba\xbe"

    def test_directory_is_archived_and_removed(self, write_file, manifest_path, tmp_path, hello_js):
        """A directory source is zipped for the call and the zip removed afterwards."""
        write_file("actions/hello/index.js", hello_js)
        write_file("actions/hello/package.json", '{"main": "index.js"}\n')

        record = compose_action(
            manifest_path, "hello", ActionSpec(function="actions/hello", runtime="nodejs:10"), "p"
        )

        assert record.action.exec.kind == "nodejs:10"
        assert record.action.exec.binary is True
        assert base64.b64decode(record.action.exec.code)[:2] == b"PK"
        assert not (tmp_path / "actions" / "hello.zip").exists()

    def test_directory_archive_removed_on_error(self, write_file, manifest_path, tmp_path, hello_js):
        write_file("actions/hello/index.js", hello_js)

        with pytest.raises(InvalidRuntimeError):
            compose_action(manifest_path, "hello", ActionSpec(function="actions/hello"), "p")

        assert not (tmp_path / "actions" / "hello.zip").exists()

    def test_each_directory_gets_own_archive(self, write_file, manifest_path, tmp_path, hello_js):
        write_file("actions/a/index.js", hello_js)
        write_file("actions/b/index.js", hello_js)
        actions = {
            "a": ActionSpec(function="actions/a", runtime="nodejs:8"),
            "b": ActionSpec(function="actions/b", runtime="nodejs:8"),
        }

        records = compose_actions(manifest_path, actions, "p")

        assert [r.action.name for r in records] == ["a", "b"]
        assert list((tmp_path / "actions").glob("*.zip")) == []

    def test_no_function(self, manifest_path):
        """An action without code still carries parameters."""
        record = compose_action(manifest_path, "stub", ActionSpec(inputs={"x": 1}), "p")

        assert record.action.exec.kind == ""
        assert record.action.exec.code is None
        assert to_dict(record.action.parameters) == {"x": 1}


class TestComposeActionRuntime:
    """Tests for declared runtimes on plain files."""

    def test_consistent_runtime(self, write_file, manifest_path, hello_js):
        write_file("src/hello.js", hello_js)

        record = compose_action(
            manifest_path, "hello", ActionSpec(function="src/hello.js", runtime="nodejs:6"), "p"
        )

        assert record.action.exec.kind == "nodejs:6"

    def test_mismatch_non_strict(self, write_file, manifest_path, hello_js, caplog):
        write_file("src/hello.js", hello_js)

        record = compose_action(
            manifest_path, "hello", ActionSpec(function="src/hello.js", runtime="python:3"), "p"
        )

        assert record.action.exec.kind == "nodejs:10"
        assert "does not match" in caplog.text

    def test_mismatch_strict(self, write_file, manifest_path, hello_js):
        write_file("src/hello.js", hello_js)

        record = compose_action(
            manifest_path,
            "hello",
            ActionSpec(function="src/hello.js", runtime="python:3"),
            "p",
            strict=True,
        )

        assert record.action.exec.kind == "python:3"

    def test_unsupported_runtime_falls_back(self, write_file, manifest_path, hello_js, caplog):
        write_file("src/hello.js", hello_js)

        with caplog.at_level(logging.WARNING):
            record = compose_action(
                manifest_path, "hello", ActionSpec(function="src/hello.js", runtime="nodejs:99"), "p"
            )

        assert record.action.exec.kind == "nodejs:10"
        assert "not supported" in caplog.text


class TestComposeActionFields:
    """Tests for main, inputs, annotations, web export and limits."""

    def test_main(self, write_file, manifest_path, hello_js):
        write_file("src/hello.js", hello_js)

        record = compose_action(
            manifest_path, "hello", ActionSpec(function="src/hello.js", main="handler"), "p"
        )

        assert record.action.exec.main == "handler"

    def test_inputs_and_annotations(self, manifest_path):
        spec = ActionSpec(
            inputs={"name": {"type": "string", "default": "Amy"}, "count": 3},
            annotations={"owner": "team-a"},
        )

        record = compose_action(manifest_path, "hello", spec, "p")

        assert to_dict(record.action.parameters) == {"name": "Amy", "count": 3}
        assert to_dict(record.action.annotations) == {"owner": "team-a"}

    def test_outputs_not_attached(self, manifest_path):
        spec = ActionSpec(outputs={"greeting": {"type": "string"}})

        record = compose_action(manifest_path, "hello", spec, "p")

        assert record.action.parameters == []

    def test_managed_annotation_last(self, manifest_path, managed):
        spec = ActionSpec(annotations={"owner": "team-a"})

        record = compose_action(manifest_path, "hello", spec, "p", managed_annotation=managed)

        assert [kv.key for kv in record.action.annotations] == ["owner", "whisk-managed"]
        assert record.action.annotations[-1] is not managed

    def test_web_export(self, manifest_path, managed):
        """web-export adds the triple after the managed annotation."""
        spec = ActionSpec(web_export="true")

        record = compose_action(manifest_path, "hello", spec, "p", managed_annotation=managed)

        assert [kv.key for kv in record.action.annotations] == [
            "whisk-managed",
            "web-export",
            "raw-http",
            "final",
        ]
        assert get_value(record.action.annotations, "web-export") is True

    def test_web_export_false(self, manifest_path):
        record = compose_action(manifest_path, "hello", ActionSpec(web_export="false"), "p")
        assert record.action.annotations == []

    def test_limits(self, manifest_path):
        spec = ActionSpec(limits={"timeout": 60000, "memorySize": 64})

        record = compose_action(manifest_path, "hello", spec, "p")

        assert record.action.limits.timeout == 60000
        assert record.action.limits.memory is None

    def test_payload(self, write_file, manifest_path, hello_js):
        write_file("src/hello.js", hello_js)

        record = compose_action(manifest_path, "hello", ActionSpec(function="src/hello.js"), "p")
        payload = record.action.to_payload()

        assert payload["exec"] == {"kind": "nodejs:10", "code": hello_js}
        assert "limits" not in payload


# =============================================================================
# Sequence Composer Tests
# =============================================================================


class TestComposeSequences:
    """Tests for sequence composition."""

    def test_qualify_action_name(self):
        assert qualify_action_name("hello", "p") == "p/hello"
        assert qualify_action_name(" other/hello ", "p") == "other/hello"

    def test_components(self):
        records = compose_sequences("n", {"pipeline": SequenceSpec(actions="a, p/b, c")}, "p")

        action = records[0].action
        assert action.name == "pipeline"
        assert action.exec.kind == "sequence"
        assert action.exec.components == ["/n/p/a", "/n/p/b", "/n/p/c"]
        assert records[0].filepath == "pipeline"

    def test_cross_package_component(self):
        records = compose_sequences("_", {"s": SequenceSpec(actions="a, utils/b")}, "p")
        assert records[0].action.exec.components == ["/_/p/a", "/_/utils/b"]

    def test_duplicates_kept(self):
        records = compose_sequences("n", {"s": SequenceSpec(actions="a, a")}, "p")
        assert records[0].action.exec.components == ["/n/p/a", "/n/p/a"]

    def test_managed_annotation(self, managed):
        records = compose_sequences(
            "n",
            {"s": SequenceSpec(actions="a", annotations={"x": 1})},
            "p",
            managed_annotation=managed,
        )
        assert [kv.key for kv in records[0].action.annotations] == ["x", "whisk-managed"]


# =============================================================================
# Package Composer Tests
# =============================================================================


class TestComposePackage:
    """Tests for package composition."""

    def test_package(self):
        pkg = PackageSpec(version="1.0", license="Apache-2.0", inputs={"region": "eu"})

        package = compose_package(pkg, "greetings", "manifest.yaml")

        assert package.name == "greetings"
        assert to_dict(package.parameters) == {"region": "eu"}

    def test_missing_version_and_license(self, caplog):
        with caplog.at_level(logging.WARNING):
            compose_package(PackageSpec(), "greetings", "manifest.yaml")

        assert "[version]" in caplog.text
        assert "[license]" in caplog.text
        assert "0.0.1" in caplog.text
        assert "unlicensed" in caplog.text

    def test_unknown_license(self, caplog):
        compose_package(PackageSpec(version="1.0", license="Made-Up-1.0"), "p", "manifest.yaml")
        assert "Made-Up-1.0" in caplog.text

    def test_managed_annotation(self, managed):
        package = compose_package(
            PackageSpec(version="1", license="MIT"), "p", "manifest.yaml", managed_annotation=managed
        )
        assert get_value(package.annotations, "whisk-managed") == managed.value


# =============================================================================
# Trigger Composer Tests
# =============================================================================


class TestComposeTriggers:
    """Tests for trigger composition."""

    def test_feed_annotation_first(self, managed):
        pkg = PackageSpec(
            triggers={"alarm": {"feed": "/whisk.system/alarms/alarm", "annotations": {"owner": "a"}}}
        )

        triggers = compose_triggers("manifest.yaml", pkg, managed_annotation=managed)

        assert [kv.key for kv in triggers[0].annotations] == ["feed", "owner", "whisk-managed"]
        assert triggers[0].annotations[0].value == "/whisk.system/alarms/alarm"

    def test_deprecated_source(self, caplog):
        pkg = PackageSpec(triggers={"alarm": {"source": "/whisk.system/alarms/alarm"}})

        triggers = compose_triggers("manifest.yaml", pkg)

        assert get_value(triggers[0].annotations, "feed") == "/whisk.system/alarms/alarm"
        assert "deprecated" in caplog.text

    def test_feed_wins_over_source(self):
        pkg = PackageSpec(triggers={"t": {"feed": "/ns/new", "source": "/ns/old"}})

        triggers = compose_triggers("manifest.yaml", pkg)

        assert get_value(triggers[0].annotations, "feed") == "/ns/new"

    def test_inputs_and_env_name(self, monkeypatch):
        monkeypatch.setenv("TRIGGER", "nightly")
        pkg = PackageSpec(triggers={"$TRIGGER": {"inputs": {"cron": "0 0 * * *"}}})

        triggers = compose_triggers("manifest.yaml", pkg)

        assert triggers[0].name == "nightly"
        assert to_dict(triggers[0].parameters) == {"cron": "0 0 * * *"}
        assert triggers[0].annotations == []


# =============================================================================
# Rule Composer Tests
# =============================================================================


class TestComposeRules:
    """Tests for rule composition."""

    def test_action_qualified(self):
        pkg = PackageSpec(rules={"on-alarm": {"trigger": "alarm", "action": "hello"}})

        rules = compose_rules(pkg, "greetings")

        assert rules[0].name == "on-alarm"
        assert rules[0].trigger == "alarm"
        assert rules[0].action == "greetings/hello"

    def test_qualified_action_unchanged(self):
        pkg = PackageSpec(rules={"r": {"trigger": "t", "action": "utils/hello"}})
        assert compose_rules(pkg, "greetings")[0].action == "utils/hello"


# =============================================================================
# Dependency Composer Tests
# =============================================================================


class TestComposeDependencies:
    """Tests for dependency composition."""

    def test_binding(self):
        pkg = PackageSpec(dependencies={"utils": {"location": "/whisk.system/utils"}})

        records = compose_dependencies(pkg, "/project", "manifest.yaml", "p")

        record = records["p:utils"]
        assert record.is_binding
        assert record.location == "/whisk.system/utils"
        assert record.version == "master"
        assert record.project_path == "/project/Packages"

    def test_remote(self):
        pkg = PackageSpec(
            dependencies={
                "hello": {
                    "location": "github.com/example/whisk-packages/packages/helloworlds",
                    "version": "1.0",
                    "inputs": {"name": "Amy"},
                }
            }
        )

        record = compose_dependencies(pkg, "/project", "manifest.yaml", "p")["p:hello"]

        assert not record.is_binding
        assert record.location == "https://github.com/example/whisk-packages/packages/helloworlds"
        assert record.base_repo == "https://github.com/example/whisk-packages"
        assert record.sub_folder == "packages/helloworlds"
        assert record.version == "1.0"
        assert to_dict(record.parameters) == {"name": "Amy"}

    def test_unknown_location(self):
        pkg = PackageSpec(dependencies={"local": {"location": "/tmp/local-package"}})

        with pytest.raises(UnknownDependencyTypeError) as exc_info:
            compose_dependencies(pkg, "/project", "manifest.yaml", "p")

        assert exc_info.value.dependency == "local"


# =============================================================================
# API Composer Tests
# =============================================================================


class TestComposeApis:
    """Tests for API create requests."""

    def test_api_request(self):
        pkg = PackageSpec(apis={"hello-world": {"hello": {"world": {"greeting": "get"}}}})

        requests = compose_api_records(pkg)

        assert len(requests) == 1
        assert requests[0].to_payload() == {
            "apidoc": {
                "apiName": "hello-world",
                "gatewayBasePath": "hello",
                "gatewayPath": "world",
                "gatewayMethod": "GET",
                "action": {
                    "name": "greeting",
                    "namespace": "",
                    "backendMethod": "GET",
                    "backendUrl": "",
                },
                "responsetype": "json",
            }
        }

    def test_response_type(self):
        pkg = PackageSpec(
            apis={"api": {"base": {"path": {"greeting": {"method": "post", "response": "http"}}}}}
        )

        api = compose_api_records(pkg)[0].api_doc

        assert api.gateway_method == "POST"
        assert api.response_type == "http"
