"""Example workflow adapter.

Use this module as a reference when implementing new workflow engine adapters.
Implement BaseWorkflowInvoker and register the provider in WorkflowInvokerFactory.
"""

import copy
import json
from typing import Any, ClassVar

from contract_analysis.workflow.base import BaseWorkflowInvoker


class ExampleWorkflowInvoker(BaseWorkflowInvoker):
    """Returns a fixed, well-formed analysis envelope without any network calls.

    The envelope echoes the submission's identifiers and wraps the analysis in
    a string-encoded ``body`` the way the real pipeline relays it, which makes
    it useful for local development and end-to-end tests.
    """

    DEFAULT_ANALYSIS: ClassVar[dict[str, Any]] = {
        "status": "ok",
        "data": {
            "originContent": [{"text": ""}],
            "summary": "",
            "ddobakCommentary": {
                "overallComment": None,
                "warningComment": None,
                "advice": None,
            },
            "toxics": [],
        },
    }

    def start_sync(self, workflow_name: str, input: dict[str, Any]) -> dict[str, Any]:
        _ = workflow_name
        storage_keys = list(input.get("storageKeys") or [])
        return {
            "contractId": input.get("contractId"),
            "storageKeys": storage_keys,
            "clientId": input.get("clientId"),
            "clientToken": input.get("clientToken"),
            "ocrResults": [
                {"page": f"{number:03d}", "text": "", "s3Key": key}
                for number, key in enumerate(storage_keys, start=1)
            ],
            "bedrockResults": {
                "statusCode": 200,
                "body": json.dumps(copy.deepcopy(self.DEFAULT_ANALYSIS)),
            },
        }
