"""
Suppliers skill: supplier list and purchase orders.
"""
from pos_skills.skills.base import Command, Skill

SUPPLIERS_HELP = """\
Usage: pos-suppliers <command> [args]

Commands:
  list [query]              List suppliers
  purchases [query]         List purchase orders
  update-purchase <id>      Update a purchase order (reads JSON from stdin)
  split-purchase            Split a purchase order (reads JSON from stdin)

Examples:
  # List all suppliers
  pos-suppliers list

  # List suppliers with pagination
  pos-suppliers list "?page=1&page_size=50"

  # List purchase orders (defaults to ?page=1&page_size=30)
  pos-suppliers purchases

  # Filter purchases by status (1 = imported)
  pos-suppliers purchases "?status=1"

  # Filter purchases by status (-1 = new, 0 = confirmed, 2 = cancelled)
  pos-suppliers purchases "?status=-1"

  # Update a purchase order
  export CONFIRM_WRITE=YES
  cat <<'JSON' | pos-suppliers update-purchase "fb056b32-9cf6-4c5a-92de-0eb94db71121"
  {
    "purchase": {
      "status": 1,
      "warehouse_id": "c52e67ad-d9d0-4276-abe4-e0c9f1f7d2da",
      "note": "Updated note",
      "items": [
        {
          "variation_id": "29044dcf-2f4c-492f-a0a9-e447b20e21da",
          "quantity": 10,
          "imported_price": 100000
        }
      ]
    }
  }
  JSON

  # Split a purchase order
  export CONFIRM_WRITE=YES
  cat split-payload.json | pos-suppliers split-purchase

Query Parameters:
  list:
    page, page_size      Pagination

  purchases:
    page, page_size      Pagination
    status               -2 (all), -1 (new), 0 (confirmed), 1 (imported), 2 (cancelled)
    type                 Type filter (default: "product")
    get_time_import      Include import time (boolean)

Purchase Status Codes:
  -1  Mới (New)
   0  Đã xác nhận (Confirmed)
   1  Đã nhập hàng (Imported)
   2  Đã hủy (Cancelled)

Environment:
  POS_API_KEY      API key (required; API_KEY is also accepted)
  SHOP_ID          Shop ID (required)
  CONFIRM_WRITE    Set to YES for write operations
  POS_BASE_URL     API base URL (default: https://pos.pages.fm/api/v1)
  POS_TIMEOUT      Request timeout in seconds (default: 30)

Exit Codes:
  0  success
  1  usage error
  2  missing or invalid configuration
  3  write not confirmed (CONFIRM_WRITE != YES)
  4  API unreachable (connection error or timeout)
  5  API answered with a non-2xx status (body still printed)
"""

SUPPLIERS = Skill(
    name="suppliers",
    summary="Suppliers and purchase orders",
    commands=[
        Command(
            name="list",
            method="GET",
            path="/shops/{shop_id}/supplier",
            summary="List suppliers",
            takes_query=True,
        ),
        Command(
            name="purchases",
            method="GET",
            path="/shops/{shop_id}/purchases",
            summary="List purchase orders",
            takes_query=True,
            default_query="?page=1&page_size=30",
        ),
        Command(
            name="update-purchase",
            method="PUT",
            path="/shops/{shop_id}/purchases/{resource_id}",
            summary="Update a purchase order (reads JSON from stdin)",
            writes=True,
            resource_id="PURCHASE_ID",
        ),
        Command(
            name="split-purchase",
            method="POST",
            path="/shops/{shop_id}/purchases/separate",
            summary="Split a purchase order (reads JSON from stdin)",
            writes=True,
        ),
    ],
    help_text=SUPPLIERS_HELP,
)
