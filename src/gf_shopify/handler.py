"""Submission handling: form filter → identity extraction → customer upsert."""

import logging
from typing import Any, Mapping, Optional

import httpx

from gf_shopify.errors import ExtractionFailed, RelayError
from gf_shopify.extraction import extract_identity
from gf_shopify.models.config import RelayConfig
from gf_shopify.models.submission import ExtractedIdentity, FormSchema, Submission
from gf_shopify.store import ActivityLog
from gf_shopify.upsert import CustomerUpsertEngine

logger = logging.getLogger(__name__)


class SubmissionHandler:
    """
    Entry point invoked once per form submission.
    Only the configured form is relayed; every outcome ends up as a boolean
    plus activity log entries, never as an exception.
    """

    def __init__(
        self,
        config: RelayConfig,
        *,
        activity_log: Optional[ActivityLog] = None,
        engine: Optional[CustomerUpsertEngine] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.config = config
        self.activity_log = activity_log
        self.engine = engine
        self._http_client = http_client

    def _wire(self) -> tuple[ActivityLog, CustomerUpsertEngine]:
        """Default log and engine, created on first relayed submission."""
        if self.activity_log is None:
            self.activity_log = ActivityLog.from_config(self.config)
        if self.engine is None:
            self.engine = CustomerUpsertEngine(
                self.config,
                activity_log=self.activity_log,
                http_client=self._http_client,
            )
        return self.activity_log, self.engine

    def handle(self, submission: Submission, form: FormSchema | Mapping[str, Any]) -> bool:
        """Relay one submission. Returns True when the customer was created or updated."""
        try:
            return self._handle(submission, form)
        except Exception:
            logger.exception("Unhandled error while relaying submission")
            return False

    def _handle(self, submission: Submission, form: FormSchema | Mapping[str, Any]) -> bool:
        schema = form if isinstance(form, FormSchema) else FormSchema.from_payload(form)
        if schema.id != self.config.target_form_id:
            logger.debug("Skipping form %s (target %s)", schema.id, self.config.target_form_id)
            return False

        log, engine = self._wire()
        log.info(f"Form submission received - Form ID: {schema.id} (Target: {self.config.target_form_id})")
        log.info(f"Processing form submission - Entry ID: {submission.get('id', 'unknown')}")

        try:
            identity = self._extract(submission, schema)
        except ExtractionFailed as e:
            log.error(str(e))
            log.info("Available entry data: " + ", ".join(str(k) for k in submission.keys()))
            return False

        log.info(f"Email found: {identity.email}")
        log.info(f"Name fields - First: '{identity.first_name}', Last: '{identity.last_name}'")

        try:
            result = engine.upsert(identity)
        except RelayError as e:
            log.error(str(e))
            result = False

        if result:
            log.success(f"Successfully created/updated customer: {identity.email}")
        else:
            log.error(f"Failed to create/update customer: {identity.email}")
        return result

    def _extract(self, submission: Submission, schema: FormSchema) -> ExtractedIdentity:
        identity = extract_identity(submission, schema)
        if not identity.has_email:
            raise ExtractionFailed("No email found in form submission")
        return identity


def handle_submission(
    submission: Submission,
    form: FormSchema | Mapping[str, Any],
    config: RelayConfig,
    *,
    activity_log: Optional[ActivityLog] = None,
    engine: Optional[CustomerUpsertEngine] = None,
    http_client: Optional[httpx.Client] = None,
) -> bool:
    """
    Relay one form submission into Shopify.
    Returns True on create/update success; False for skipped forms and failures.
    """
    handler = SubmissionHandler(
        config,
        activity_log=activity_log,
        engine=engine,
        http_client=http_client,
    )
    return handler.handle(submission, form)
