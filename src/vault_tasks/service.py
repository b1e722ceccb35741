"""Export service: extracts tasks from the host document and sends them on."""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from vault_tasks.config import VaultTasksConfig
from vault_tasks.errors import HostError, TaskEncodingError
from vault_tasks.extract import extract_tasks, mark_complete
from vault_tasks.host import TaskHost
from vault_tasks.links import build_navigation_url, make_link_builder
from vault_tasks.pipeline import FieldPipeline

NO_TASKS_MESSAGE = "No tasks found in the selected text."


@dataclass
class ExportResult:
    """Outcome of one export run."""

    urls: list[str] = field(default_factory=list)
    failures: list[TaskEncodingError] = field(default_factory=list)
    marked_complete: bool = False

    @property
    def task_count(self) -> int:
        return len(self.urls) + len(self.failures)


class TaskExportService:
    """Runs the extract -> encode -> dispatch flow against a TaskHost.

    Nothing is sent and the document is not touched until every task in the
    batch has been processed.
    """

    def __init__(self, host: TaskHost, config: VaultTasksConfig) -> None:
        self.host = host
        self.config = config

    def export(self, selection_only: bool = False, complete: Optional[bool] = None) -> ExportResult:
        """
        Send every unchecked task in the document (or selection) to the task manager.

        Args:
            selection_only: Only look at the selected text
            complete: Mark tasks complete afterwards. Defaults to the mark_complete setting

        Returns:
            ExportResult with the generated URLs and any per-task failures

        Raises:
            HostError: If the host cannot supply the document, or fails to open
                a command or save the rewritten text
        """
        should_complete = self.config.mark_complete if complete is None else complete
        mode = self.config.recognition_mode

        try:
            text = self.host.get_selected_text() if selection_only else self.host.get_document_text()
            file_path = self.host.get_current_file_path()
            vault_name = self.host.get_collection_name()
        except Exception as e:
            logger.error(f"Could not read document from host: {e}")
            raise HostError(f"Could not read document: {e}") from e

        raw_tasks = [task.serialize() for task in extract_tasks(text, mode)]
        if not raw_tasks:
            logger.warning(NO_TASKS_MESSAGE)
            self.host.notify_user(NO_TASKS_MESSAGE)
            return ExportResult()

        logger.info(f"Extracted {len(raw_tasks)} task(s) from {file_path}")

        link_builder = make_link_builder(self.config.navigation_scheme, vault_name)
        base_note = build_navigation_url(self.config.navigation_scheme, vault_name, file_path) + "\n"
        pipeline = FieldPipeline.from_config(self.config, link_builder)

        result = ExportResult()
        for raw in raw_tasks:
            try:
                result.urls.append(pipeline.process(raw, base_note))
            except TaskEncodingError as e:
                logger.error(f"Skipping task: {e}")
                result.failures.append(e)

        self._dispatch(result.urls)

        if result.failures:
            message = f"{len(result.failures)} of {result.task_count} task(s) could not be sent."
            if should_complete:
                message += " The note was left unchanged."
            self.host.notify_user(message)
        elif should_complete:
            self._write_completed(text, selection_only)
            result.marked_complete = True

        return result

    def _dispatch(self, urls: list[str]) -> None:
        for url in urls:
            logger.debug(f"Opening URL: {url}")
            try:
                self.host.open_external_command(url)
            except Exception as e:
                logger.error(f"Could not open command URL: {e}")
                raise HostError(f"Could not open command URL: {e}") from e

    def _write_completed(self, text: str, selection_only: bool) -> None:
        completed = mark_complete(text, self.config.recognition_mode)
        try:
            if selection_only:
                self.host.replace_selected_text(completed)
            else:
                self.host.replace_document_text(completed)
        except Exception as e:
            logger.error(f"Could not update document: {e}")
            raise HostError(f"Could not update document: {e}") from e
