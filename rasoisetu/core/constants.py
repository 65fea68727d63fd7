"""Global constants for the rasoisetu application."""

# Collection names
USERS_COLLECTION = "users"
SUPPLIERS_COLLECTION = "suppliers"
INVENTORY_COLLECTION = "inventory"
ORDERS_COLLECTION = "orders"
GROUP_ORDERS_COLLECTION = "groupOrders"

# Item classification
CATEGORIES = (
    "vegetables",
    "spices",
    "grains",
    "dairy",
    "oil",
    "snacks",
    "beverages",
    "packaging",
    "other",
)
UNITS = ("kg", "grams", "litre", "ml", "pieces", "dozen", "packet")

# User roles
ROLE_RETAILER = "retailer"
ROLE_SUPPLIER = "supplier"
ROLES = (ROLE_RETAILER, ROLE_SUPPLIER)
DEFAULT_LANGUAGE = "en"

# Group order statuses
GROUP_ORDER_ACTIVE = "active"
GROUP_ORDER_COMPLETED = "completed"
GROUP_ORDER_EXPIRED = "expired"
GROUP_ORDER_MIN_VENDORS = 2
GROUP_ORDER_REFRESH_SECONDS = 30
EXPIRED_LABEL = "expired"

# Direct order statuses
ORDER_PENDING = "pending"
ORDER_CONFIRMED = "confirmed"
ORDER_REJECTED = "rejected"
ORDER_COMPLETED = "completed"
ORDER_STATUSES = (ORDER_PENDING, ORDER_CONFIRMED, ORDER_REJECTED, ORDER_COMPLETED)

# Inventory stock levels
LOW_STOCK_THRESHOLD = 10

# Invoices
INVOICE_TITLE = "Rasoi Setu"
CURRENCY_SYMBOL = "₹"
