"""
Seed demo data for test@example.com through the controllers
(same validation, ownership and invalidation path as the UI).
Run:  python create_test_user.py && python seed_test_data.py
"""
import sys
from datetime import timedelta

from app.application.businesses import BusinessController, DepartmentController
from app.application.context import CurrentUser, UserContext
from app.application.goals import GoalController
from app.application.notifications import LoggingNotifier
from app.application.planner import PlannerEventController
from app.application.savings import SavingsTargetController, InvestmentController
from app.application.transactions import TransactionController
from app.auth import get_user_by_email
from app.infrastructure.cache.query_cache import QueryCache
from app.infrastructure.db.session import open_session
from app.infrastructure.store.sql import SqlRecordStore
from app.utils.dates import local_today

EMAIL = "test@example.com"

# ── bootstrap ────────────────────────────────────────────────────
with open_session() as db:
    user = get_user_by_email(db, EMAIL)
    if not user:
        print(f"User {EMAIL} not found, run create_test_user.py first"); sys.exit(1)
    current = CurrentUser(id=user.id, email=user.email)

today = local_today()
ctx = UserContext.build(current, SqlRecordStore(), QueryCache(), LoggingNotifier(), today)

if ctx.store.select("businesses", limit=1):
    print("Demo data already exists, nothing to do"); sys.exit(0)

# ═══════════════════════════════════════════════════════════════
# Businesses + departments
# ═══════════════════════════════════════════════════════════════
businesses = [
    ({"name": "Northwind Studio", "industry": "Technology", "revenue": "125000", "status": "active",
      "description": "Product design and web development"}, ["Engineering", "Design", "Sales"]),
    ({"name": "Green Leaf Cafe", "industry": "Retail", "revenue": "48200.50", "status": "active"},
     ["Kitchen", "Front of house"]),
    ({"name": "Harbor Consulting", "industry": "Consulting", "revenue": "0", "status": "pending"}, []),
]
for fields, departments in businesses:
    business = BusinessController(ctx).create(fields).row
    for name in departments:
        DepartmentController(ctx).create({"business_id": business["id"], "name": name})

# ═══════════════════════════════════════════════════════════════
# Transactions (last 30 days)
# ═══════════════════════════════════════════════════════════════
transactions = [
    ("income", "5200", "Salary", "Monthly salary", 28),
    ("income", "1350.00", "Freelance", "Landing page project", 20),
    ("expense", "1450", "Other Expense", "Rent", 27),
    ("expense", "312.40", "Food", "Groceries", 15),
    ("expense", "89.99", "Utilities", "Internet + phone", 12),
    ("expense", "42.50", "Entertainment", "Concert tickets", 3),
    ("income", "180", "Investment", "Dividends", 1),
]
for tx_type, amount, category, description, days_ago in transactions:
    TransactionController(ctx).create({
        "type": tx_type, "amount": amount, "category": category,
        "description": description, "date": today - timedelta(days=days_ago),
    })

# ═══════════════════════════════════════════════════════════════
# Savings + investments
# ═══════════════════════════════════════════════════════════════
SavingsTargetController(ctx).create({
    "name": "Emergency fund", "target_amount": "10000", "current_amount": "6500",
})
SavingsTargetController(ctx).create({
    "name": "New laptop", "target_amount": "2400", "current_amount": "900",
    "deadline": today + timedelta(days=90),
})
InvestmentController(ctx).create({"name": "S&P 500 ETF", "type": "Stocks", "amount": "8000", "current_value": "9120.35"})
InvestmentController(ctx).create({"name": "Government bonds", "type": "Bonds", "amount": "3000", "current_value": "2950"})

# ═══════════════════════════════════════════════════════════════
# Goals + today's planner
# ═══════════════════════════════════════════════════════════════
for title, category, progress in [
    ("Launch the cafe website", "Career", 60),
    ("Run a half marathon", "Health", 25),
    ("Read 24 books", "Education", 0),
    ("Pay off the car loan", "Financial", 100),
]:
    goal = GoalController(ctx).create({"title": title, "category": category, "priority": "medium"}).row
    GoalController(ctx).update_progress(goal["id"], progress)

for title, event_type, start, end in [
    ("Team stand-up", "meeting", "09:30", "09:45"),
    ("Review cafe P&L", "task", "11:00", "12:00"),
    ("Call the accountant", "reminder", "15:00", ""),
]:
    PlannerEventController(ctx).create({
        "title": title, "type": event_type, "date": today,
        "start_time": start, "end_time": end,
    })

print(f"Seeded demo data for {EMAIL}")
