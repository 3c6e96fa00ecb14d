"""Invoice Listing — paginated order invoices with their customer attached.

Invariants:
    - Any authenticated caller
    - internal_notes is neither filterable, sortable nor exposed
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.api.deps import ListParams, get_list_params, get_request_context
from orderdesk.core.domain_types import CacheKeyTemplate, InvoiceStatus, UserId
from orderdesk.core.projection import RelatedProjection
from orderdesk.core.repository_protocols import ResultCache
from orderdesk.infrastructure.database import get_db
from orderdesk.infrastructure.page_source import SqlAlchemyPageSource
from orderdesk.infrastructure.result_cache import get_result_cache
from orderdesk.models.order_invoice import OrderInvoice
from orderdesk.schemas.listing import OrderInvoiceDto, PageResponse, UserSummary
from orderdesk.services.cached_listing import CachedListing, list_with_cache
from orderdesk.services.query_results import query_results

router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])

INVOICE_FIELDS = ("id", "number", "status", "total_cents", "user_id", "issued_at")
INVOICE_LISTING = CachedListing(CacheKeyTemplate.ORDER_INVOICE_GET_LIST, OrderInvoiceDto)


@router.get(
    "",
    response_model=PageResponse[OrderInvoiceDto],
    dependencies=[Depends(get_request_context)],
)
async def list_invoices(
    params: ListParams = Depends(get_list_params),
    status: InvoiceStatus | None = Query(None),
    user_id: UserId | None = Query(None),
    db: AsyncSession = Depends(get_db),
    cache: ResultCache | None = Depends(get_result_cache),
):
    """List invoices, optionally filtered by status or customer."""
    args = params.to_args({
        "status": status.value if status else None,
        "user_id": user_id,
    })
    source = SqlAlchemyPageSource(
        db, OrderInvoice, fields=INVOICE_FIELDS, eager=("customer",),
    )
    return await list_with_cache(
        cache, INVOICE_LISTING, args,
        lambda: query_results(
            source, args, OrderInvoiceDto, RelatedProjection("customer", UserSummary),
        ),
    )
