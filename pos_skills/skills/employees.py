"""
Employees skill: shop staff with their department and sale group.
"""
from pos_skills.skills.base import Command, Skill

EMPLOYEES_HELP = """\
Usage: pos-employees <command> [args]

Commands:
  list [query]      List all employees in the shop

Examples:
  # List all employees
  pos-employees list

  # Filter employees by department (using jq)
  pos-employees list | jq '.data[] | select(.department.name == "Sales")'

  # Find employee by name
  pos-employees list | jq '.data[] | select(.user.name | contains("Hoang"))'

  # Get all employee emails
  pos-employees list | jq -r '.data[].user.email'

  # Get employees in a specific sale group
  pos-employees list | jq '.data[] | select(.sale_group.name == "Ca sáng")'

  # Count employees by department
  pos-employees list | jq '[.data[] | .department.name] | group_by(.) | map({department: .[0], count: length})'

Response Structure:
  Each employee has:
    - user_id          Employee UUID
    - user.name        Employee name
    - user.email       Employee email
    - user.phone_number  Phone number (may be null)
    - user.fb_id       Facebook ID if logged in via FB
    - department.id    Department ID
    - department.name  Department name (e.g., "Sales", "Support")
    - sale_group.id    Sale group ID
    - sale_group.name  Sale group name (e.g., "Ca sáng", "Nhóm A")

Environment:
  POS_API_KEY    API key (required; API_KEY is also accepted)
  SHOP_ID        Shop ID (required)
  POS_BASE_URL   API base URL (default: https://pos.pages.fm/api/v1)
  POS_TIMEOUT    Request timeout in seconds (default: 30)
"""

EMPLOYEES = Skill(
    name="employees",
    summary="Shop employees",
    commands=[
        Command(
            name="list",
            method="GET",
            path="/shops/{shop_id}/users",
            summary="List all employees in the shop",
            takes_query=True,
        ),
    ],
    help_text=EMPLOYEES_HELP,
)
