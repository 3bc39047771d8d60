"""Upload a batch file into a transaction store."""

from nach_core.config import NachConfig
from nach_core.exceptions import InvalidUploadError
from nach_core.logging import get_logger
from nach_core.models.results import IngestionResult
from nach_core.parsing.file_parser import FileParser
from nach_core.store.base import TransactionStore
from nach_core.validation.rules import validate_upload


class IngestionService:
    """Validate, parse and persist one uploaded file at a time."""

    def __init__(
        self,
        store: TransactionStore,
        config: NachConfig | None = None,
        parser: FileParser | None = None,
    ) -> None:
        self.store = store
        self.config = config or NachConfig()
        self.parser = parser or FileParser(self.config.parser)

    def ingest(self, content: bytes, file_name: str) -> IngestionResult:
        """Parse ``content`` and insert every non-PARSE_ERROR transaction.

        Parameters
        ----------
        content : bytes
            Raw file bytes.
        file_name : str
            Original upload name; drives file type and batch number.

        Returns
        -------
        IngestionResult
            Counts of parsed, valid, inserted and rejected records. Store
            rejections do not roll back records already inserted.

        Raises
        ------
        InvalidUploadError
            When the name, extension or size is not acceptable.
        """
        check = validate_upload(file_name, len(content), self.config.upload)
        if not check.valid:
            raise InvalidUploadError(check.error_message, check)

        parsed = self.parser.parse(content, file_name)
        log = get_logger(__name__, file_name=file_name, batch_no=parsed.context.batch_no)

        inserted = 0
        failed = 0
        for transaction in parsed.transactions:
            if transaction.is_parse_error:
                continue
            if self.store.insert(transaction):
                inserted += 1
            else:
                failed += 1

        if failed:
            log.warning("File %s: %d of %d records rejected by the store", file_name, failed, parsed.valid_count)
        log.info(
            "Ingested %s: %d/%d records inserted, %d parse errors",
            file_name,
            inserted,
            parsed.total_count,
            parsed.parse_error_count,
        )

        return IngestionResult(
            file_name=file_name,
            file_type=parsed.context.file_type,
            batch_no=parsed.context.batch_no,
            transaction_count=parsed.total_count,
            valid_count=parsed.valid_count,
            parse_error_count=parsed.parse_error_count,
            inserted_count=inserted,
            failed_count=failed,
            truncated=parsed.truncated,
        )
