from __future__ import annotations

from expense_analytics.analytics.models import ensure_records
from expense_analytics.config import Settings
from expense_analytics.nlq.categories import category_vocabulary
from expense_analytics.nlq.executor import execute_intent
from expense_analytics.nlq.router import route
from expense_analytics.nlq.types import NLQClarification, NLQRequest, NLQResponse


def handle_nlq(req: NLQRequest, settings: Settings | None = None) -> NLQResponse:
    rows = ensure_records(req.records)

    routed = route(req.text, category_vocabulary(rows))
    if routed is None:
        return NLQResponse(result=None, clarification=None)

    if isinstance(routed, NLQClarification):
        return NLQResponse(result=None, clarification=routed)

    return NLQResponse(
        result=execute_intent(rows, routed, settings, as_of=req.as_of), clarification=None
    )
