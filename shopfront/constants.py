APP_NAME = "Shopfront POS"
STYLE_FILE = "style.qss"

DATA_DIR = "data"
SESSION_FILE_NAME = "session.json"

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000/api"
API_BASE_URL_ENV = "SHOPFRONT_API_BASE_URL"
REQUEST_TIMEOUT_SECONDS = 15

PAGE_SIZE = 10
LOW_STOCK_THRESHOLD = 3
STOCK_BADGE_WARNING = 5

WALK_IN_CUSTOMER = "Walk-in Customer"
DEFAULT_SUPPLIER = "Unnamed Supplier"

# (value sent to the API, label)
PAYMENT_METHODS = [
    ("cash", "Cash"),
    ("upi", "UPI"),
    ("card", "Card"),
    ("bank", "Bank Transfer"),
]
REFUND_METHODS = [
    ("cash", "Cash"),
    ("upi", "UPI"),
    ("card", "Card"),
]

TARGET_GROUPS = ["male", "female", "boys", "girls", "unisex"]
KIDS_GROUPS = ("boys", "girls")

CURRENCIES = {
    "INR": ("Indian Rupee", "₹"),
    "USD": ("US Dollar", "$"),
    "EUR": ("Euro", "€"),
}
