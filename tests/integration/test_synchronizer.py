"""Integration tests for the signature synchronizer and code fix provider."""

from __future__ import annotations

import pytest

from sigsync.adapters import JavaAdapter
from sigsync.analysis.detector import MismatchDetector
from sigsync.core.cancellation import CancellationToken, OperationCancelledError
from sigsync.core.config import SigsyncConfig
from sigsync.core.models import Diagnostic
from sigsync.fix import (
    CODE_FIX_TITLE,
    EQUIVALENCE_KEY,
    DocumentResolver,
    ResolutionStrategy,
    SignatureCodeFixProvider,
    SignatureSynchronizer,
)
from sigsync.workspace.project import Project

INTERFACE = """\
package p;

import java.util.concurrent.CompletableFuture;

public interface I {
    void foo();
}
"""

IMPLEMENTATION = """\
package p;

import java.util.concurrent.CompletableFuture;

public class C implements I {
    public CompletableFuture<Integer> foo(int x) {
        return CompletableFuture.completedFuture(x);
    }
}
"""


@pytest.fixture
def synchronizer(java_adapter: JavaAdapter, config: SigsyncConfig) -> SignatureSynchronizer:
    return SignatureSynchronizer(java_adapter, config)


@pytest.fixture
def detect(java_adapter: JavaAdapter, config: SigsyncConfig):
    def _detect(project: Project) -> list[Diagnostic]:
        return MismatchDetector(config).detect_all(java_adapter.build_symbol_table(project))

    return _detect


def fix_first(synchronizer: SignatureSynchronizer, detect, project: Project) -> Project:
    diagnostic = detect(project)[0]
    return synchronizer.synchronize(
        project, diagnostic.location.document_id, diagnostic.location.start_byte
    )


def text_of(project: Project, name: str) -> str:
    document = project.find_document_by_name(name)
    assert document is not None
    return document.text


class TestSynchronize:
    """Tests for rewriting the interface member."""

    def test_updates_parameters_and_return_type(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})

        updated = fix_first(synchronizer, detect, project)

        assert text_of(updated, "I.java") == INTERFACE.replace(
            "void foo();", "CompletableFuture<Integer> foo(int x);"
        )
        assert text_of(updated, "C.java") == IMPLEMENTATION

    def test_input_project_is_unchanged(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})

        fix_first(synchronizer, detect, project)

        assert text_of(project, "I.java") == INTERFACE

    def test_recheck_reports_nothing(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})

        updated = fix_first(synchronizer, detect, project)

        assert detect(updated) == []

    def test_recheck_without_import_in_interface(self, synchronizer, detect, make_project) -> None:
        interface = INTERFACE.replace("import java.util.concurrent.CompletableFuture;\n\n", "")
        project = make_project({"src/p/I.java": interface, "src/p/C.java": IMPLEMENTATION})

        updated = fix_first(synchronizer, detect, project)

        assert "CompletableFuture<Integer> foo(int x);" in text_of(updated, "I.java")
        assert detect(updated) == []

    def test_second_application_is_a_no_op(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})
        diagnostic = detect(project)[0]
        location = diagnostic.location

        once = synchronizer.synchronize(project, location.document_id, location.start_byte)
        edits = synchronizer.compute_edit(once, location.document_id, location.start_byte)

        assert edits.is_empty

    def test_single_document_edit(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})
        location = detect(project)[0].location

        edits = synchronizer.compute_edit(project, location.document_id, location.start_byte)

        assert len(edits) == 1
        assert edits.edits[0].document_id == project.find_document_by_name("I.java").id

    def test_keeps_modifiers_and_surroundings(self, synchronizer, detect, make_project) -> None:
        interface = (
            "package p;\n\ninterface Store {\n"
            "    /** Reads a value. */\n"
            "    @Deprecated\n"
            "    <T> T read(String key) throws java.io.IOException;\n\n"
            "    void close();\n}\n"
        )
        implementation = (
            "package p;\n\nclass FileStore implements Store {\n"
            "    public <T> T read(String key, Class<T> type) { return null; }\n"
            "    public void close() {}\n}\n"
        )
        project = make_project({"src/Store.java": interface, "src/FileStore.java": implementation})

        updated = fix_first(synchronizer, detect, project)

        assert text_of(updated, "Store.java") == interface.replace(
            "<T> T read(String key) throws",
            "<T> T read(String key, Class<T> type) throws",
        )

    def test_reproduces_nullability_and_varargs(self, synchronizer, detect, make_project) -> None:
        interface = "package p;\n\ninterface Log {\n    void write(String line);\n}\n"
        implementation = (
            "package p;\n\nimport javax.annotation.Nullable;\n\n"
            "class ConsoleLog implements Log {\n"
            "    public void write(@Nullable String prefix, Object... args) {}\n}\n"
        )
        project = make_project({"src/Log.java": interface, "src/ConsoleLog.java": implementation})

        updated = fix_first(synchronizer, detect, project)

        assert "    void write(@Nullable String prefix, Object... args);\n" in text_of(updated, "Log.java")
        assert detect(updated) == []

    def test_default_method_body_is_kept(self, synchronizer, detect, make_project) -> None:
        interface = (
            "package p;\n\ninterface Sized {\n"
            "    default int size() {\n        return 0;\n    }\n}\n"
        )
        implementation = "package p;\n\nclass Bag implements Sized {\n    public long size() { return 1L; }\n}\n"
        project = make_project({"src/Sized.java": interface, "src/Bag.java": implementation})

        updated = fix_first(synchronizer, detect, project)

        assert "    default long size() {\n        return 0;\n    }\n" in text_of(updated, "Sized.java")

    def test_interface_and_implementation_in_one_document(
        self, synchronizer, detect, make_project
    ) -> None:
        source = (
            "package p;\n\ninterface Shape { double area(); }\n\n"
            "class Square implements Shape { public double area(double side) { return side * side; } }\n"
        )
        project = make_project({"src/Shapes.java": source})

        updated = fix_first(synchronizer, detect, project)

        assert "interface Shape { double area(double side); }" in text_of(updated, "Shapes.java")


class TestNoEdit:
    """Conditions that leave the project untouched."""

    def test_position_outside_a_method(self, synchronizer, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})
        document = project.find_document_by_name("C.java")

        assert synchronizer.compute_edit(project, document.id, 0).is_empty

    def test_method_without_interface(self, synchronizer, make_project) -> None:
        source = "package p;\n\nclass Plain {\n    public int foo(int x) { return x; }\n}\n"
        project = make_project({"src/Plain.java": source})
        document = project.documents[0]

        edits = synchronizer.compute_edit(project, document.id, source.index("foo"))

        assert edits.is_empty
        assert synchronizer.synchronize(project, document.id, source.index("foo")) is project

    def test_same_named_field_member(self, synchronizer, make_project) -> None:
        interface = "package p;\n\ninterface Limits {\n    int max = 10;\n}\n"
        implementation = "package p;\n\nclass Impl implements Limits {\n    public int max(int a) { return a; }\n}\n"
        project = make_project({"src/Limits.java": interface, "src/Impl.java": implementation})
        document = project.find_document_by_name("Impl.java")

        edits = synchronizer.compute_edit(project, document.id, implementation.index("max"))

        assert edits.is_empty


class TestCancellation:
    def test_cancelled_token_raises(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})
        location = detect(project)[0].location
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            synchronizer.compute_edit(project, location.document_id, location.start_byte, token)

        assert text_of(project, "I.java") == INTERFACE

    def test_token_state(self) -> None:
        token = CancellationToken()
        assert not token.is_cancelled
        token.raise_if_cancelled()
        token.cancel()
        assert token.is_cancelled


class TestCodeFixProvider:
    """Tests for code fix registration."""

    def test_registers_one_fix(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})
        diagnostic = detect(project)[0]
        provider = SignatureCodeFixProvider(synchronizer)

        (code_fix,) = provider.register_code_fixes(diagnostic)

        assert code_fix.title == CODE_FIX_TITLE == "Update interface member to match implementation"
        assert code_fix.equivalence_key == EQUIVALENCE_KEY == "SIG001.UpdateInterfaceMember"
        assert code_fix.diagnostic == diagnostic
        assert "CompletableFuture<Integer> foo(int x);" in text_of(code_fix.apply(project), "I.java")

    def test_ignores_other_rules(self, synchronizer, detect, make_project) -> None:
        project = make_project({"src/p/I.java": INTERFACE, "src/p/C.java": IMPLEMENTATION})
        diagnostic = detect(project)[0].model_copy(update={"rule_id": "OTHER001"})

        assert SignatureCodeFixProvider(synchronizer).register_code_fixes(diagnostic) == []

    def test_fixable_rule_ids(self, synchronizer) -> None:
        assert SignatureCodeFixProvider(synchronizer).fixable_rule_ids == ("SIG001",)


class TestGenericMethods:
    """The rebuilt declaration carries the implementation's type parameters."""

    def test_type_parameters_are_added(self, synchronizer, detect, make_project) -> None:
        interface = "package p;\n\ninterface Finder {\n    void find();\n}\n"
        implementation = (
            "package p;\n\nimport java.util.List;\n\n"
            "class DbFinder implements Finder {\n"
            "    public <T> List<T> find(Class<T> c) { return null; }\n}\n"
        )
        project = make_project({"src/Finder.java": interface, "src/DbFinder.java": implementation})

        updated = fix_first(synchronizer, detect, project)

        assert "    <T> List<T> find(Class<T> c);\n" in text_of(updated, "Finder.java")
        assert detect(updated) == []

    def test_type_parameters_are_replaced(self, synchronizer, detect, make_project) -> None:
        interface = "package p;\n\ninterface Cache {\n    <T> T get(String key);\n}\n"
        implementation = (
            "package p;\n\nclass MapCache implements Cache {\n"
            "    public <K, V extends Number> V get(K key) { return null; }\n}\n"
        )
        project = make_project({"src/Cache.java": interface, "src/MapCache.java": implementation})

        updated = fix_first(synchronizer, detect, project)

        assert "    <K, V extends Number> V get(K key);\n" in text_of(updated, "Cache.java")

    def test_type_parameters_are_removed(self, synchronizer, detect, make_project) -> None:
        interface = "package p;\n\ninterface Sink {\n    public <T> void put(T value);\n}\n"
        implementation = (
            "package p;\n\nclass TextSink implements Sink {\n"
            "    public void put(String value, int times) {}\n}\n"
        )
        project = make_project({"src/Sink.java": interface, "src/TextSink.java": implementation})

        updated = fix_first(synchronizer, detect, project)

        assert "    public void put(String value, int times);\n" in text_of(updated, "Sink.java")


class TestResolutionFallbacks:
    """Repairs routed through a narrowed document resolution chain."""

    IMPL = "package p;\n\nclass Impl implements Service {\n    public void run(int times) {}\n}\n"
    API = "package p;\n\ninterface Service {\n    void run();\n}\n"

    @staticmethod
    def synchronizer_for(
        java_adapter: JavaAdapter, config: SigsyncConfig, *strategies: ResolutionStrategy
    ) -> SignatureSynchronizer:
        resolver = DocumentResolver(java_adapter, config.source_extension, strategies)
        return SignatureSynchronizer(java_adapter, config, resolver=resolver)

    @staticmethod
    def repair(synchronizer: SignatureSynchronizer, detect, project: Project) -> Project:
        (diagnostic,) = detect(project)
        location = diagnostic.location
        return synchronizer.synchronize(project, location.document_id, location.start_byte)

    def test_type_file_name_document_is_edited(
        self, java_adapter, config, detect, make_project
    ) -> None:
        copy = "package q;\n\ninterface Service {\n    void run();\n}\n"
        project = make_project(
            {"src/p/Impl.java": self.IMPL, "src/p/Api.java": self.API, "src/q/Service.java": copy}
        )
        synchronizer = self.synchronizer_for(
            java_adapter, config, ResolutionStrategy.TYPE_FILE_NAME, ResolutionStrategy.METHOD_SCAN
        )

        updated = self.repair(synchronizer, detect, project)

        assert text_of(updated, "Service.java") == copy.replace("void run();", "void run(int times);")
        assert text_of(updated, "Api.java") == self.API

    def test_method_scan_document_is_edited(
        self, java_adapter, config, detect, make_project
    ) -> None:
        generated = "package gen;\n\ninterface Generated {\n    void run();\n}\n"
        project = make_project(
            {
                "src/p/Impl.java": self.IMPL,
                "src/gen/Generated.java": generated,
                "src/p/Api.java": self.API,
            }
        )
        synchronizer = self.synchronizer_for(java_adapter, config, ResolutionStrategy.METHOD_SCAN)

        updated = self.repair(synchronizer, detect, project)

        assert text_of(updated, "Generated.java") == generated.replace(
            "void run();", "void run(int times);"
        )
        assert text_of(updated, "Api.java") == self.API

    def test_resolved_document_without_the_declaration(
        self, java_adapter, config, detect, make_project
    ) -> None:
        other = "package q;\n\ninterface Service {\n    void run(long count);\n}\n"
        project = make_project(
            {"src/p/Impl.java": self.IMPL, "src/p/Api.java": self.API, "src/q/Service.java": other}
        )
        synchronizer = self.synchronizer_for(java_adapter, config, ResolutionStrategy.TYPE_FILE_NAME)

        assert self.repair(synchronizer, detect, project) is project

    def test_no_document_resolves(self, java_adapter, config, detect, make_project) -> None:
        project = make_project({"src/p/Impl.java": self.IMPL, "src/p/Api.java": self.API})
        synchronizer = self.synchronizer_for(java_adapter, config, ResolutionStrategy.TYPE_FILE_NAME)

        assert self.repair(synchronizer, detect, project) is project
