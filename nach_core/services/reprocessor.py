"""Re-run acceptance on failed or stuck transactions and record the outcome."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Sequence

from nach_core.config import ReprocessConfig
from nach_core.exceptions import InvalidReprocessRequestError
from nach_core.logging import get_logger
from nach_core.models.enums import AcceptanceRule, TransactionStatus
from nach_core.models.results import ReprocessAuditEntry, ReprocessResult
from nach_core.models.transaction import Transaction
from nach_core.status import check_acceptance, is_reprocessable, transition
from nach_core.store.base import TransactionStore
from nach_core.validation.rules import validate_reprocess_request

logger = logging.getLogger(__name__)


class Reprocessor:
    """Move ERROR, STUCK and FAILED transactions to REPROCESSED when they now pass."""

    def __init__(
        self,
        store: TransactionStore,
        config: ReprocessConfig | None = None,
        acceptance_rule: AcceptanceRule = AcceptanceRule.MINIMAL,
    ) -> None:
        """Initialize reprocessor.

        Parameters
        ----------
        store : TransactionStore
            Source of the transactions and target of status writes.
        config : ReprocessConfig | None
            Batch cap, default actor/reason and worker count.
        acceptance_rule : AcceptanceRule
            Must match the rule used at ingestion.
        """
        self.store = store
        self.config = config or ReprocessConfig()
        self.acceptance_rule = acceptance_rule

    def reprocess(
        self,
        transaction_ids: Sequence[int],
        actor: str | None = None,
        reason: str | None = None,
    ) -> ReprocessResult:
        """Reprocess a batch of transaction ids.

        Ids that do not exist or are not in a reprocessable status are
        skipped and counted neither as candidates nor as successes.

        Raises
        ------
        InvalidReprocessRequestError
            When the id list is empty, above the batch cap, or holds a
            non-positive id. No record is touched in that case.
        """
        ids = list(transaction_ids) if transaction_ids is not None else []
        check = validate_reprocess_request(ids, self.config.max_batch_size)
        if not check.valid:
            raise InvalidReprocessRequestError(check.error_message, check)

        result = ReprocessResult(
            actor=actor or self.config.default_actor,
            reason=reason or self.config.default_reason,
        )

        log = get_logger(__name__, actor=result.actor, reason=result.reason)
        unique_ids = list(dict.fromkeys(ids))
        fetched = {t.id: t for t in self.store.get_by_ids(unique_ids)}

        candidates: list[Transaction] = []
        for txn_id in unique_ids:
            txn = fetched.get(txn_id)
            if txn is None or not is_reprocessable(txn.status):
                result.skipped_ids.append(txn_id)
            else:
                candidates.append(txn)

        result.total_count = len(candidates)
        if not candidates:
            log.info("No eligible transactions among %d ids", len(unique_ids))
            return result

        if self.config.max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                outcomes = list(pool.map(lambda t: self._reprocess_one(t, result.actor, result.reason), candidates))
        else:
            outcomes = [self._reprocess_one(t, result.actor, result.reason) for t in candidates]

        for entry in outcomes:
            if entry is None:
                result.failed_count += 1
            else:
                result.success_count += 1
                result.audit.append(entry)

        log.info(
            "Reprocessed %d/%d transactions, %d skipped",
            result.success_count,
            result.total_count,
            len(result.skipped_ids),
        )
        return result

    def _reprocess_one(self, transaction: Transaction, actor: str, reason: str) -> ReprocessAuditEntry | None:
        rejection = check_acceptance(transaction, self.acceptance_rule, require_mandate=False)
        if rejection is not None:
            logger.debug("Transaction %s still fails acceptance: %s", transaction.id, rejection[1])
            return None

        previous = TransactionStatus(transaction.status)
        updated = transition(replace(transaction), TransactionStatus.REPROCESSED)
        if not self.store.update_status(updated.id, updated.status, updated.error_code, updated.error_desc):
            logger.warning("Store rejected REPROCESSED update for transaction %s", transaction.id)
            return None

        return ReprocessAuditEntry(
            transaction_id=updated.id,
            txn_ref_no=updated.txn_ref_no,
            previous_status=previous,
            new_status=updated.status,
            actor=actor,
            reason=reason,
        )
