# Overview: Resource and action identifiers used by the grant table.
# Both stay open strings: values missing here are accepted and simply denied.


class Resource:
    """Protected capability domains."""
    USERS = "users"
    EMPLOYEES = "employees"
    BRANCHES = "branches"
    PRODUCTS = "products"
    CATEGORIES = "categories"
    SUPPLIERS = "suppliers"
    SALES = "sales"
    REPORTS = "reports"
    DASHBOARD = "dashboard"
    SETTINGS = "settings"
    INTEGRATIONS = "integrations"
    BACKUP = "backup"
    ANALYTICS = "analytics"
    BILLING = "billing"
    COMMISSIONS = "commissions"
    CUSTOMERS = "customers"
    REFUNDS = "refunds"
    PRESCRIPTIONS = "prescriptions"
    MEDICATION_HISTORY = "medication_history"
    STOCK_MOVEMENTS = "stock_movements"
    RECEIPTS = "receipts"


class Action:
    """Operations on a resource. MANAGE implies every action on that resource."""
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"
    APPROVE = "approve"
    REJECT = "reject"
    EXPORT = "export"
