"""Project initialization workflow.

Drives one ``init`` run through its stages:

    idle -> selecting_product -> resolving_name -> acquiring
         -> initializing_manifest -> persisting_metadata -> notifying -> done

with ``failed`` reachable from every non-terminal stage. Stages run strictly
one after the other; each stage's outcome lands in the result log.
"""

import logging
from pathlib import Path
from typing import Callable

from rich.console import Console

from acquisition.base import BackendRegistry
from integrations.catalog import CatalogClient, sort_catalog
from integrations.notifications import NotificationClient
from local_storage.jenkinsfile import create_jenkinsfile
from local_storage.metadata_store import MetadataStore
from orchestrator.naming import NamingResolver
from orchestrator.prompts import PromptLimitExceeded, Prompter
from package_managers.base import PackageManager
from package_managers.registry import (
    detect_package_manager,
    get_package_manager,
    list_package_managers,
)
from schemas.errors import (
    DeserializationError,
    ProcessSpawnError,
    SerializationError,
    StarterkitError,
)
from schemas.product import BLANK_PRODUCT, BLANK_SLUG, Product
from schemas.project_metadata import ProjectMetadata
from schemas.results import CliStatus, ResultEntry
from schemas.workflow_state import TERMINAL_STAGES, Stage, WorkflowArgs, WorkflowState

logger = logging.getLogger(__name__)


# Valid transitions; FAILED is reachable from every non-terminal stage
TRANSITIONS: dict[Stage, set[Stage]] = {
    Stage.IDLE: {Stage.SELECTING_PRODUCT},
    Stage.SELECTING_PRODUCT: {Stage.RESOLVING_NAME},
    # Declining to overwrite an existing folder ends the run early
    Stage.RESOLVING_NAME: {Stage.ACQUIRING, Stage.DONE},
    Stage.ACQUIRING: {Stage.INITIALIZING_MANIFEST},
    Stage.INITIALIZING_MANIFEST: {Stage.PERSISTING_METADATA},
    Stage.PERSISTING_METADATA: {Stage.NOTIFYING},
    Stage.NOTIFYING: {Stage.DONE},
}

SEE_OTHER_MESSAGE = "Please run `starterkit list` to see available packages."
DECLINED_LOCATION_MESSAGE = "OK, will not initialize project in this location."
INIT_FAILED_MESSAGE = "Problem with project initialization"
METADATA_SAVED_MESSAGE = "Project metadata saved."
METADATA_NOT_SAVED_MESSAGE = "Project metadata not saved."


class InitOrchestrator:
    """Runs the project initialization workflow.

    Owns the ``WorkflowState``; collaborators are injected so the default
    wiring lives at the CLI. Errors raised by a stage are caught here, turned
    into a single result entry and stop the run.

    Usage:
        orchestrator = InitOrchestrator(args, cwd=Path.cwd(), catalog=...,
                                        backends=..., metadata_store=...,
                                        notifier=..., prompter=...)
        state = orchestrator.run()
        print_results(state.results)
    """

    def __init__(
        self,
        args: WorkflowArgs,
        cwd: Path,
        catalog: CatalogClient,
        backends: BackendRegistry,
        metadata_store: MetadataStore,
        notifier: NotificationClient,
        prompter: Prompter,
        console: Console | None = None,
        report: Callable[[list[ResultEntry]], None] | None = None,
        max_prompts: int = 10,
        default_package_manager: str = "npm",
        products_url: str = "https://starterkit.dev/products",
        jenkinsfile: bool = True,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            args: Parsed command options
            cwd: Directory the project is created in
            catalog: Remote product catalog
            backends: Acquisition backend per product kind
            metadata_store: Manifest reader/writer
            notifier: Best-effort creation notifier
            prompter: Interactive prompts
            console: Rich console for notices
            report: Prints result entries before a forced exit
            max_prompts: Bound for every interactive retry loop
            default_package_manager: Preselected package manager
            products_url: Public product pages base URL
            jenkinsfile: Write a Jenkinsfile into new projects
        """
        self.state = WorkflowState(args=args, cwd=Path(cwd))
        self.catalog = catalog
        self.backends = backends
        self.metadata_store = metadata_store
        self.notifier = notifier
        self.prompter = prompter
        self.console = console or Console()
        self.report = report
        self.max_prompts = max_prompts
        self.default_package_manager = default_package_manager
        self.products_url = products_url.rstrip("/")
        self.jenkinsfile = jenkinsfile
        self.naming = NamingResolver(prompter, self.state.cwd, max_prompts=max_prompts)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def can_transition(self, to_stage: Stage) -> bool:
        current = self.state.stage
        if current in TERMINAL_STAGES:
            return False
        if to_stage == Stage.FAILED:
            return True
        return to_stage in TRANSITIONS.get(current, set())

    def _transition(self, to_stage: Stage) -> None:
        if not self.can_transition(to_stage):
            raise RuntimeError(
                f"Invalid transition: {self.state.stage.value} -> {to_stage.value}"
            )
        logger.info("INIT: %s -> %s", self.state.stage.value, to_stage.value)
        self.state.stage = to_stage
        self.state.visited.append(to_stage)

    def _fail(self, error: StarterkitError) -> None:
        logger.info("INIT: Stage %s failed: %s", self.state.stage.value, error.message)
        self.state.add_result(error.status, error.message)
        self.state.failure_reason = error.message
        self._transition(Stage.FAILED)

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    def run(self) -> WorkflowState:
        """Run the workflow to a terminal stage.

        Returns:
            The final state; ``state.results`` holds everything to report.

        Raises:
            SystemExit: With code 0 when an interactive loop exceeds its
                bound (after reporting where to look instead).
        """
        try:
            self._select_product()
            self._resolve_name()
            if not self._confirm_location():
                self.state.add_result(CliStatus.SUCCESS, DECLINED_LOCATION_MESSAGE)
                self._transition(Stage.DONE)
                return self.state
            self._acquire()
            self._initialize_manifest()
            self._persist_metadata()
        except PromptLimitExceeded:
            self._circuit_break()
        except StarterkitError as e:
            self._fail(e)
            return self.state

        self._notify()
        self._transition(Stage.DONE)
        return self.state

    def _circuit_break(self) -> None:
        entry = ResultEntry(status=CliStatus.SEE_OTHER, message=SEE_OTHER_MESSAGE)
        logger.info("INIT: Prompt limit of %d reached, exiting", self.max_prompts)
        if self.report is not None:
            self.report([entry])
        else:
            self.console.print(entry.message)
        raise SystemExit(0)

    def _select_product(self) -> None:
        self._transition(Stage.SELECTING_PRODUCT)

        if self.state.args.blank:
            self.state.product = BLANK_PRODUCT
            return

        products = sort_catalog(self.catalog.fetch_catalog())
        by_slug = {product.product_slug: product for product in products}
        choices = [(BLANK_PRODUCT.product_title, BLANK_SLUG)] + [
            (self._choice_label(product), product.product_slug) for product in products
        ]

        while True:
            self.state.prompt_count += 1
            if self.state.prompt_count > self.max_prompts:
                raise PromptLimitExceeded(self.max_prompts)

            slug = self.prompter.select("Choose project to initialize", choices)

            if slug == BLANK_SLUG:
                self.state.product = BLANK_PRODUCT
                return

            product = by_slug[slug]
            if product.available:
                self.state.product = product
                return

            self.console.print(
                "[yellow]You cannot create this project. Please visit "
                f"{self.products_url}/{product.product_slug}/ and make sure it is "
                "available for you.[/yellow]"
            )

    @staticmethod
    def _choice_label(product: Product) -> str:
        if product.available:
            return product.product_title
        return f"{product.product_title} [dim](not available)[/dim]"

    def _resolve_name(self) -> None:
        self._transition(Stage.RESOLVING_NAME)
        product = self.state.product

        requested = self.state.args.project_name
        if not requested:
            if product.is_blank:
                requested = self.prompter.text(
                    "Enter project name",
                    "Project name must not be empty.",
                )
            else:
                requested = product.product_slug

        name, _ = self.naming.resolve(requested)
        self.state.project_name = name

    def _confirm_location(self) -> bool:
        if not self.state.project_root.exists():
            return True
        return self.prompter.confirm(
            f"It will erase data in {self.state.project_name}. Do you want to continue?",
            default=False,
        )

    def _acquire(self) -> None:
        self._transition(Stage.ACQUIRING)
        product = self.state.product

        backend = self.backends.for_product(product)
        logger.info("INIT: Acquiring %s with %s backend", product.product_slug, backend.name)
        backend.acquire(product, self.state.project_root)
        self.state.add_result(CliStatus.SUCCESS, backend.completed_message)

    def _initialize_manifest(self) -> None:
        self._transition(Stage.INITIALIZING_MANIFEST)
        project_root = self.state.project_root

        package_manager = self._choose_package_manager(project_root)
        self.state.package_manager = package_manager

        manifest_path = project_root / package_manager.manifest_file
        if manifest_path.exists():
            # Sources shipped their own manifest; it only has to be readable
            self.metadata_store.load(manifest_path)
            logger.info("INIT: Using existing manifest %s", manifest_path)
            return

        # A process that never started raises ProcessSpawnError with status 1
        exit_code = package_manager.init(project_root).wait()
        if exit_code != 0:
            raise ProcessSpawnError(INIT_FAILED_MESSAGE, status=exit_code)

        self.state.add_result(
            CliStatus.SUCCESS,
            f"Project {self.state.project_name} successfully created",
        )

    def _choose_package_manager(self, project_root: Path) -> PackageManager:
        name = self.state.args.package_manager
        if not name:
            hints = self._manifest_hints(project_root)
            name = detect_package_manager(hints, project_root)
        if not name:
            name = self.prompter.select(
                "Which package manager do you use?",
                [(manager, manager) for manager in list_package_managers()],
                default=self.default_package_manager,
            )
        return get_package_manager(name)

    def _manifest_hints(self, project_root: Path) -> dict | None:
        manifest_path = project_root / "package.json"
        if not manifest_path.exists():
            return None
        try:
            return self.metadata_store.read_raw(manifest_path)
        except DeserializationError as e:
            logger.debug("Ignoring unreadable manifest for detection: %s", e.message)
            return None

    def _persist_metadata(self) -> None:
        self._transition(Stage.PERSISTING_METADATA)
        package_manager = self.state.package_manager
        manifest_path = self.state.project_root / package_manager.manifest_file

        metadata = ProjectMetadata(
            name=self.state.project_name,
            package_manager=package_manager.name,
        )
        try:
            self.metadata_store.save(manifest_path, metadata)
        except (DeserializationError, SerializationError) as e:
            logger.warning("Could not save metadata to %s: %s", manifest_path, e.message)
            raise SerializationError(METADATA_NOT_SAVED_MESSAGE) from e

        self.state.add_result(CliStatus.SUCCESS, METADATA_SAVED_MESSAGE)

        if self.jenkinsfile:
            create_jenkinsfile(self.state.project_root, package_manager)

    def _notify(self) -> None:
        self._transition(Stage.NOTIFYING)
        package_manager = self.state.package_manager
        metadata = ProjectMetadata(
            name=self.state.project_name,
            package_manager=package_manager.name,
        )
        report = self.notifier.notify(metadata)
        if not report.delivered:
            logger.warning("INIT: Notification not delivered: %s", report.error)
