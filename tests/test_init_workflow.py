"""Tests for the project initialization workflow."""

import io
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest
from rich.console import Console

from acquisition import ArchiveDownload, BackendRegistry, BlankDirectory
from acquisition.base import AcquisitionBackend
from integrations.auth import AuthHandler
from integrations.base import BackendClient
from integrations.notifications import DeliveryReport
from local_storage.metadata_store import MetadataStore
from orchestrator.init_workflow import InitOrchestrator
from schemas.errors import NetworkError, ProcessSpawnError, SerializationError
from schemas.product import Product, ProductKind
from schemas.results import CliStatus
from schemas.workflow_state import Stage, WorkflowArgs
from tests.conftest import FakeHandle, FakePackageManager, FakePrompter

FULL_RUN = [
    Stage.IDLE,
    Stage.SELECTING_PRODUCT,
    Stage.RESOLVING_NAME,
    Stage.ACQUIRING,
    Stage.INITIALIZING_MANIFEST,
    Stage.PERSISTING_METADATA,
    Stage.NOTIFYING,
    Stage.DONE,
]


class RecordingBackend(AcquisitionBackend):
    """Writes a fixed set of files into the project root."""

    name = "recording"

    def __init__(self, files: dict[str, str] | None = None):
        self.files = files or {}
        self.acquired: list[tuple[str, Path]] = []

    def acquire(self, product, project_root):
        self.acquired.append((product.product_slug, project_root))
        project_root.mkdir(parents=True, exist_ok=True)
        for name, content in self.files.items():
            (project_root / name).write_text(content)


def make_orchestrator(
    tmp_path,
    prompter,
    catalog,
    notifier,
    args=None,
    backends=None,
    metadata_store=None,
    **kwargs,
):
    kwargs.setdefault("console", Console(file=io.StringIO(), width=200))
    registry = backends or BackendRegistry(
        {
            ProductKind.BLANK: BlankDirectory(),
            ProductKind.FREE: RecordingBackend(),
            ProductKind.PAID: RecordingBackend(),
        }
    )
    return InitOrchestrator(
        args or WorkflowArgs(),
        cwd=tmp_path,
        catalog=catalog,
        backends=registry,
        metadata_store=metadata_store or MetadataStore(),
        notifier=notifier,
        prompter=prompter,
        **kwargs,
    )


class TestBlankProject:
    def test_end_to_end(self, tmp_path, prompter, catalog, notifier):
        package_manager = FakePackageManager(FakeHandle(0))
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch("orchestrator.init_workflow.get_package_manager", return_value=package_manager):
            state = orchestrator.run()

        assert state.visited == FULL_RUN
        assert [entry.message for entry in state.results] == [
            "Initialization completed.",
            "Project my-app successfully created",
            "Project metadata saved.",
        ]
        assert all(entry.ok for entry in state.results)
        assert package_manager.init_calls == [tmp_path / "my-app"]

        manifest = json.loads((tmp_path / "my-app" / "package.json").read_text())
        assert manifest == {"name": "my-app", "packageManager": "npm"}

        catalog.fetch_catalog.assert_not_called()
        notifier.notify.assert_called_once()
        assert notifier.notify.call_args.args[0].name == "my-app"

    def test_blank_from_catalog_prompts_for_name(self, tmp_path, catalog, notifier):
        prompter = FakePrompter(selects=["blank"], texts=["my-blank"])
        args = WorkflowArgs(package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.stage == Stage.DONE
        assert state.project_name == "my-blank"
        assert prompter.messages("text") == ["Enter project name"]
        assert (tmp_path / "my-blank").is_dir()

    def test_prompts_for_package_manager(self, tmp_path, catalog, notifier):
        prompter = FakePrompter(selects=["yarn"])
        args = WorkflowArgs(blank=True, project_name="my-app")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ) as get_manager:
            orchestrator.run()

        get_manager.assert_called_once_with("yarn")
        assert prompter.messages("select") == ["Which package manager do you use?"]
        assert [value for _, value in prompter.last_choices] == ["npm", "yarn", "pnpm"]


class TestProductSelection:
    def test_choices_start_with_blank_then_sorted_catalog(self, tmp_path, catalog, notifier):
        prompter = FakePrompter(selects=["react-starter"])
        args = WorkflowArgs(package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            orchestrator.run()

        assert [value for _, value in prompter.last_choices] == [
            "blank",
            "angular-pro",
            "react-starter",
            "admin-pro",
        ]
        assert prompter.last_choices[0][0] == "Blank project"

    def test_product_slug_is_default_name(self, tmp_path, catalog, notifier):
        prompter = FakePrompter(selects=["react-starter"])
        args = WorkflowArgs(package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.project_name == "react-starter"
        assert state.project_root == tmp_path / "react-starter"

    def test_unavailable_product_reprompts(self, tmp_path, catalog, notifier):
        prompter = FakePrompter(selects=["admin-pro", "angular-pro"])
        output = io.StringIO()
        args = WorkflowArgs(package_manager="npm")
        orchestrator = make_orchestrator(
            tmp_path,
            prompter,
            catalog,
            notifier,
            args=args,
            console=Console(file=output, width=200),
        )

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.prompt_count == 2
        assert state.product.product_slug == "angular-pro"
        assert "You cannot create this project" in output.getvalue()
        assert "https://starterkit.dev/products/admin-pro/" in output.getvalue()

    def test_prompt_limit_exits_successfully(self, tmp_path, catalog, notifier):
        prompter = FakePrompter(selects=["admin-pro"] * 20)
        report = MagicMock()
        orchestrator = make_orchestrator(
            tmp_path, prompter, catalog, notifier, report=report, max_prompts=10
        )

        with pytest.raises(SystemExit) as exc_info:
            orchestrator.run()

        assert exc_info.value.code == 0
        assert len(prompter.messages("select")) == 10
        (entries,), _ = report.call_args
        assert len(entries) == 1
        assert entries[0].status == CliStatus.SEE_OTHER
        assert entries[0].message == "Please run `starterkit list` to see available packages."

    def test_catalog_failure(self, tmp_path, prompter, catalog, notifier):
        catalog.fetch_catalog.side_effect = NetworkError("Connection error: refused")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier)

        state = orchestrator.run()

        assert state.stage == Stage.FAILED
        assert state.visited[-2:] == [Stage.SELECTING_PRODUCT, Stage.FAILED]
        assert len(state.results) == 1
        assert state.results[0].status == CliStatus.ERROR
        assert state.failure_reason == "Connection error: refused"


class TestExistingLocation:
    def test_decline_leaves_directory_untouched(self, tmp_path, catalog, notifier):
        existing = tmp_path / "my-app"
        existing.mkdir()
        (existing / "keep.txt").write_text("data")

        # Keep the name, then refuse to erase
        prompter = FakePrompter(confirms=[False, False])
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        state = orchestrator.run()

        assert state.stage == Stage.DONE
        assert state.visited == [
            Stage.IDLE,
            Stage.SELECTING_PRODUCT,
            Stage.RESOLVING_NAME,
            Stage.DONE,
        ]
        assert len(state.results) == 1
        assert state.results[0].status == CliStatus.SUCCESS
        assert state.results[0].message == "OK, will not initialize project in this location."
        assert (existing / "keep.txt").read_text() == "data"
        notifier.notify.assert_not_called()

    def test_confirmed_erase_replaces_contents(self, tmp_path, catalog, notifier):
        existing = tmp_path / "my-app"
        existing.mkdir()
        (existing / "old.txt").write_text("old")

        prompter = FakePrompter(confirms=[False, True])
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.stage == Stage.DONE
        assert not (existing / "old.txt").exists()
        assert prompter.messages("confirm")[1] == (
            "It will erase data in my-app. Do you want to continue?"
        )

    def test_rename_avoids_collision(self, tmp_path, catalog, notifier):
        (tmp_path / "my-app").mkdir()
        prompter = FakePrompter(confirms=[True], texts=["my-app-2"])
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.project_name == "my-app-2"
        assert (tmp_path / "my-app-2").is_dir()


class TestManifestInitialization:
    def run_blank(self, tmp_path, prompter, catalog, notifier, handle):
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)
        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(handle),
        ):
            return orchestrator.run()

    def test_nonzero_exit_code_is_reported(self, tmp_path, prompter, catalog, notifier):
        state = self.run_blank(tmp_path, prompter, catalog, notifier, FakeHandle(3))

        assert state.stage == Stage.FAILED
        assert state.visited[-2:] == [Stage.INITIALIZING_MANIFEST, Stage.FAILED]
        assert state.results[-1].status == 3
        assert state.results[-1].message == "Problem with project initialization"
        assert not (tmp_path / "my-app" / "package.json").exists()
        notifier.notify.assert_not_called()

    def test_spawn_error_is_reported(self, tmp_path, prompter, catalog, notifier):
        handle = FakeHandle(error=ProcessSpawnError("[Errno 2] No such file or directory: 'npm'"))
        state = self.run_blank(tmp_path, prompter, catalog, notifier, handle)

        assert state.stage == Stage.FAILED
        assert state.results[-1].status == CliStatus.ERROR
        assert "No such file" in state.results[-1].message

    def test_existing_manifest_is_kept(self, tmp_path, catalog, notifier):
        manifest = {
            "name": "angular-pro",
            "packageManager": "yarn@4.1.0",
            "scripts": {"start": "ng serve"},
        }
        backend = RecordingBackend({"package.json": json.dumps(manifest)})
        registry = BackendRegistry({ProductKind.PAID: backend})
        prompter = FakePrompter(selects=["angular-pro"])
        orchestrator = make_orchestrator(
            tmp_path, prompter, catalog, notifier, backends=registry
        )

        # No process is spawned because the product shipped its manifest
        with patch("package_managers.base.subprocess.Popen") as popen:
            state = orchestrator.run()

        popen.assert_not_called()
        assert state.visited == FULL_RUN
        assert [entry.message for entry in state.results] == [
            "Initialization completed.",
            "Project metadata saved.",
        ]
        saved = json.loads((tmp_path / "angular-pro" / "package.json").read_text())
        assert saved["packageManager"] == "yarn"
        assert saved["scripts"] == {"start": "ng serve"}


class TestPaidProduct:
    def test_rejected_credentials_stop_at_acquisition(self, tmp_path, catalog, notifier):
        def handler(request):
            return httpx.Response(401, json={"message": "Unauthorized"})

        backend = BackendClient(
            api_url="https://api.test",
            auth=AuthHandler(token="expired"),
            transport=httpx.MockTransport(handler),
        )
        registry = BackendRegistry({ProductKind.PAID: ArchiveDownload(backend)})
        prompter = FakePrompter(selects=["angular-pro"])
        orchestrator = make_orchestrator(
            tmp_path, prompter, catalog, notifier, backends=registry
        )

        state = orchestrator.run()

        assert state.stage == Stage.FAILED
        assert state.visited[-2:] == [Stage.ACQUIRING, Stage.FAILED]
        assert len(state.results) == 1
        assert state.results[0].status == CliStatus.UNAUTHORIZED
        assert not (tmp_path / "angular-pro" / "package.json").exists()
        notifier.notify.assert_not_called()


class TestMetadataAndNotification:
    def test_metadata_save_failure(self, tmp_path, prompter, catalog, notifier):
        store = MagicMock()
        store.save.side_effect = SerializationError("Could not write package.json")
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(
            tmp_path, prompter, catalog, notifier, args=args, metadata_store=store
        )

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.stage == Stage.FAILED
        assert state.results[-1].status == CliStatus.INTERNAL_SERVER_ERROR
        assert state.results[-1].message == "Project metadata not saved."
        notifier.notify.assert_not_called()

    def test_undelivered_notification_does_not_fail_run(self, tmp_path, prompter, catalog, notifier):
        notifier.notify.return_value = DeliveryReport(delivered=False, error="API error: 503")
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.stage == Stage.DONE
        assert state.results[-1].message == "Project metadata saved."


def test_illegal_transition_raises(tmp_path, prompter, catalog, notifier):
    orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier)

    with pytest.raises(RuntimeError, match="Invalid transition"):
        orchestrator._transition(Stage.ACQUIRING)


class TestProjectLocation:
    def test_absolute_name_stays_under_working_directory(self, tmp_path, catalog, notifier):
        work = tmp_path / "work"
        work.mkdir()
        victim = tmp_path / "victim"
        victim.mkdir()
        (victim / "precious.txt").write_text("keep")

        prompter = FakePrompter(texts=["my-app"])
        args = WorkflowArgs(blank=True, project_name=str(victim), package_manager="npm")
        orchestrator = make_orchestrator(work, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.stage == Stage.DONE
        assert state.project_root == work / "my-app"
        assert (victim / "precious.txt").read_text() == "keep"

    def test_relative_escape_in_product_slug_is_renamed(self, tmp_path, notifier):
        catalog = MagicMock()
        catalog.fetch_catalog.return_value = [
            Product(product_title="Sneaky", product_slug="../outside", available=True)
        ]
        work = tmp_path / "work"
        work.mkdir()
        prompter = FakePrompter(selects=["../outside"], texts=["inside"])
        orchestrator = make_orchestrator(
            work, prompter, catalog, notifier, args=WorkflowArgs(package_manager="npm")
        )

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.project_root == work / "inside"
        assert not (tmp_path / "outside").exists()


class TestJenkinsfile:
    def test_written_after_metadata(self, tmp_path, prompter, catalog, notifier):
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(tmp_path, prompter, catalog, notifier, args=args)

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            state = orchestrator.run()

        assert state.stage == Stage.DONE
        jenkinsfile = (tmp_path / "my-app" / "Jenkinsfile").read_text()
        assert "sh 'npm install'" in jenkinsfile
        assert "sh 'npm run build'" in jenkinsfile

    def test_disabled(self, tmp_path, prompter, catalog, notifier):
        args = WorkflowArgs(blank=True, project_name="my-app", package_manager="npm")
        orchestrator = make_orchestrator(
            tmp_path, prompter, catalog, notifier, args=args, jenkinsfile=False
        )

        with patch(
            "orchestrator.init_workflow.get_package_manager",
            return_value=FakePackageManager(),
        ):
            orchestrator.run()

        assert not (tmp_path / "my-app" / "Jenkinsfile").exists()


def test_non_utf8_manifest_fails_run(tmp_path, catalog, notifier):
    backend = RecordingBackend()
    registry = BackendRegistry({ProductKind.PAID: backend})
    prompter = FakePrompter(selects=["angular-pro"])
    orchestrator = make_orchestrator(
        tmp_path,
        prompter,
        catalog,
        notifier,
        args=WorkflowArgs(package_manager="npm"),
        backends=registry,
    )

    def write_latin1_manifest(product, project_root):
        project_root.mkdir(parents=True)
        (project_root / "package.json").write_bytes(b'{"name": "caf\xe9"}')

    with patch.object(backend, "acquire", side_effect=write_latin1_manifest):
        state = orchestrator.run()

    assert state.stage == Stage.FAILED
    assert state.visited[-2:] == [Stage.INITIALIZING_MANIFEST, Stage.FAILED]
    assert state.results[-1].status == CliStatus.INTERNAL_SERVER_ERROR
    notifier.notify.assert_not_called()
