"""Integration tests for the check and fix services and the client facade."""

from __future__ import annotations

from pathlib import Path

from sigsync.client import SigsyncClient
from sigsync.core.config import SigsyncConfig
from sigsync.services import CheckService, FixService

REPOSITORY = "src/main/java/com/example/repo/UserRepository.java"


class TestCheckService:
    def test_reports_drifted_method(self, drift_project: Path, config: SigsyncConfig) -> None:
        result = CheckService(config).check(drift_project)

        assert result.success
        assert result.documents_count == 3
        assert result.types_count == 3
        assert [d.arguments[0] for d in result.diagnostics] == ["save"]
        assert result.diagnostics[0].interface_signature == "void save(User user)"
        assert result.diagnostics[0].implementation_signature == (
            "boolean save(User user, boolean flush)"
        )
        assert result.warnings == []

    def test_excluded_directories_are_not_checked(self, drift_project: Path, config: SigsyncConfig) -> None:
        result = CheckService(config).check(drift_project)
        assert all("StaleRepository" not in (d.containing_type or "") for d in result.diagnostics)

    def test_missing_project(self, tmp_path: Path, config: SigsyncConfig) -> None:
        result = CheckService(config).check(tmp_path / "missing")
        assert not result.success
        assert "does not exist" in result.errors[0]

    def test_empty_project_warns(self, tmp_path: Path, config: SigsyncConfig) -> None:
        result = CheckService(config).check(tmp_path)
        assert result.success
        assert result.diagnostics == []
        assert result.warnings == [f"No .java files found under {tmp_path.resolve()}"]

    def test_validation_warnings(self, write_project, config: SigsyncConfig) -> None:
        root = write_project({"Task.java": "class Task implements Runnable { public void run() {} }"})
        result = CheckService(config).check(root)
        assert result.warnings == [
            "Type 'Task' implements 'java.lang.Runnable', which is not declared in the project"
        ]

    def test_report(self, drift_project: Path, config: SigsyncConfig) -> None:
        result = CheckService(config).check(drift_project)
        report = result.to_report()
        assert report.root == str(drift_project.resolve())
        assert report.diagnostics == result.diagnostics


class TestFixService:
    def test_dry_run_leaves_files_untouched(self, drift_project: Path, config: SigsyncConfig) -> None:
        original = (drift_project / REPOSITORY).read_text()

        result = FixService(config).fix(drift_project, dry_run=True)

        assert result.success
        assert [f.interface for f in result.applied] == ["com.example.repo.UserRepository"]
        assert result.remaining == []
        assert result.written_files == []
        assert len(result.changes) == 1
        assert result.changes[0].original == original
        assert "    boolean save(User user, boolean flush);\n" in result.changes[0].updated
        assert (drift_project / REPOSITORY).read_text() == original

    def test_fix_writes_files(self, drift_project: Path, config: SigsyncConfig) -> None:
        result = FixService(config).fix(drift_project)

        assert result.written_files == [(drift_project / REPOSITORY).resolve()]
        assert "boolean save(User user, boolean flush);" in (drift_project / REPOSITORY).read_text()
        assert CheckService(config).check(drift_project).diagnostics == []

    def test_method_filter(self, drift_project: Path, config: SigsyncConfig) -> None:
        result = FixService(config).fix(drift_project, dry_run=True, method="findAll")
        assert result.applied == []
        assert result.changes == []

    def test_conflicting_implementations_terminate(self, write_project, config: SigsyncConfig) -> None:
        root = write_project(
            {
                "p/I.java": "package p;\ninterface I {\n    void foo();\n}\n",
                "p/A.java": "package p;\nclass A implements I { public void foo(int a) {} }\n",
                "p/B.java": "package p;\nclass B implements I { public void foo(String b) {} }\n",
            }
        )

        result = FixService(config).fix(root, dry_run=True)

        assert [f.method for f in result.applied] == ["p.A.foo"]
        assert result.passes == 1
        assert [d.containing_type for d in result.skipped] == ["p.B"]
        assert [d.containing_type for d in result.remaining] == ["p.B"]
        (change,) = result.changes
        assert "    void foo(int a);\n" in change.updated

    def test_first_repair_is_kept_when_other_implementer_matched(
        self, write_project, config: SigsyncConfig
    ) -> None:
        root = write_project(
            {
                "p/I.java": "package p;\ninterface I {\n    void foo();\n}\n",
                "p/A.java": "package p;\nclass A implements I { public void foo(int a) {} }\n",
                "p/B.java": "package p;\nclass B implements I { public void foo() {} }\n",
            }
        )

        result = FixService(config).fix(root)

        assert [(f.method, f.new_signature) for f in result.applied] == [("p.A.foo", "void foo(int a)")]
        assert [d.containing_type for d in result.remaining] == ["p.B"]
        assert result.written_files == [(root / "p/I.java").resolve()]
        assert "    void foo(int a);\n" in (root / "p/I.java").read_text()

    def test_unrepairable_mismatch_is_skipped(self, write_project, config: SigsyncConfig) -> None:
        # Both sides render as "Date", so the rewrite changes nothing
        root = write_project(
            {
                "p/I.java": "package p;\nimport java.sql.Date;\ninterface I {\n    Date created();\n}\n",
                "p/C.java": (
                    "package p;\nclass C implements I {\n"
                    "    public java.util.Date created() { return null; }\n}\n"
                ),
            }
        )

        result = FixService(config).fix(root, dry_run=True)

        assert result.applied == []
        assert [d.arguments[0] for d in result.skipped] == ["created"]
        assert [d.arguments[0] for d in result.remaining] == ["created"]
        assert result.passes == 1
        assert result.changes == []

    def test_pass_limit(self, write_project, config: SigsyncConfig) -> None:
        root = write_project(
            {
                "p/I.java": "package p;\ninterface I {\n    void a();\n    void b();\n}\n",
                "p/C.java": "package p;\nclass C implements I { public int a() { return 0; } public int b() { return 0; } }\n",
            }
        )
        capped = config.model_copy(update={"max_fix_passes": 1})

        result = FixService(capped).fix(root, dry_run=True)

        assert result.passes == 1
        assert len(result.applied) == 1
        assert len(result.remaining) == 1

    def test_missing_project(self, tmp_path: Path, config: SigsyncConfig) -> None:
        result = FixService(config).fix(tmp_path / "missing")
        assert not result.success


class TestSigsyncClient:
    def test_services_are_shared(self, config: SigsyncConfig) -> None:
        client = SigsyncClient(config)
        assert client.checker is client.checker
        assert client.fixer is client.fixer
        assert client.config is config

    def test_check_and_fix(self, drift_project: Path, config: SigsyncConfig) -> None:
        client = SigsyncClient(config)

        assert len(client.check(drift_project).diagnostics) == 1
        assert len(client.fix(str(drift_project)).applied) == 1
        assert client.check(drift_project).diagnostics == []
