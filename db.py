import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime

from credentials import hash_credential
from models import StockItem, Supplier, User

logger = logging.getLogger(__name__)

DB_FILE = "stockmanager.db"

# Single shared connection, opened on first use and closed on shutdown
_conn = None


class StorageError(Exception):
    """The database could not be reached or rejected a statement."""


class SupplierInUseError(Exception):
    """A supplier still referenced by stock items cannot be deleted."""


# --------- CONNECTION ----------
def use_database(path):
    global DB_FILE
    close_db()
    DB_FILE = path


def db_connect():
    global _conn
    if _conn is None:
        try:
            _conn = sqlite3.connect(DB_FILE)
        except sqlite3.Error as e:
            logger.exception("Cannot open database %s", DB_FILE)
            raise StorageError(f"Cannot open database {DB_FILE}: {e}") from e
        _conn.row_factory = sqlite3.Row
    return _conn


def close_db():
    global _conn
    if _conn is not None:
        _conn.close()
        _conn = None


@contextmanager
def _cursor(action):
    conn = db_connect()
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except (sqlite3.Error, OverflowError) as e:
        conn.rollback()
        logger.exception("Error %s", action)
        raise StorageError(f"Error {action}: {e}") from e
    finally:
        cur.close()


# --------- SCHEMA & SAMPLE DATA ----------
SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        username TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL,
        fullName TEXT,
        email TEXT,
        role TEXT DEFAULT 'user',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );
    CREATE TABLE IF NOT EXISTS suppliers (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        contactInfo TEXT,
        address TEXT,
        email TEXT,
        phone TEXT
    );
    CREATE TABLE IF NOT EXISTS stock_items (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        price REAL NOT NULL,
        quantity INTEGER NOT NULL,
        supplier_id TEXT,
        FOREIGN KEY (supplier_id) REFERENCES suppliers(id)
    );
"""

DEFAULT_ADMIN = ("U001", "admin", "admin123", "System Administrator", "admin")

SAMPLE_SUPPLIERS = [
    ("S001", "Tech Supplies Inc.", "Primary Electronics Supplier",
     "123 Tech Ave, Silicon Valley", "info@techsupplies.com", "555-1234"),
    ("S002", "Office Essentials", "Office Supplies Provider",
     "456 Office Blvd, Business District", "contact@officeessentials.com", "555-5678"),
    ("S003", "Furniture Warehouse", "Furniture and Fixtures",
     "789 Warehouse Rd, Industrial Zone", "sales@furniturewarehouse.com", "555-9012"),
]

SAMPLE_ITEMS = [
    ("I001", "Laptop", "High-performance business laptop", 1200.00, 15, "S001"),
    ("I002", "Desk Chair", "Ergonomic office chair", 250.00, 30, "S003"),
    ("I003", "Printer", "Color laser printer", 350.00, 10, "S001"),
    ("I004", "Paper Reams", "A4 printing paper, 500 sheets", 5.00, 200, "S002"),
    ("I005", "Desk", "Standard office desk", 300.00, 20, "S003"),
]


def init_db(seed=True):
    conn = db_connect()
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error as e:
        logger.exception("Database initialization error")
        raise StorageError(f"Database initialization error: {e}") from e
    if seed:
        _insert_sample_data()


def _insert_sample_data():
    with _cursor("inserting sample data") as cur:
        cur.execute("SELECT COUNT(*) FROM users WHERE username=?", (DEFAULT_ADMIN[1],))
        if cur.fetchone()[0] == 0:
            user_id, username, password, full_name, role = DEFAULT_ADMIN
            cur.execute(
                "INSERT INTO users (id, username, password, fullName, role) VALUES (?,?,?,?,?)",
                (user_id, username, hash_credential(password), full_name, role)
            )
            logger.info("Created default admin account '%s'", username)

        cur.execute("SELECT COUNT(*) FROM suppliers")
        if cur.fetchone()[0] > 0:
            return
        cur.executemany(
            "INSERT INTO suppliers (id, name, contactInfo, address, email, phone) VALUES (?,?,?,?,?,?)",
            SAMPLE_SUPPLIERS
        )
        cur.executemany(
            "INSERT INTO stock_items (id, name, description, price, quantity, supplier_id) VALUES (?,?,?,?,?,?)",
            SAMPLE_ITEMS
        )
        logger.info("Inserted %d sample suppliers and %d sample items", len(SAMPLE_SUPPLIERS), len(SAMPLE_ITEMS))


# --------- STOCK ITEMS ----------
STOCK_ITEM_QUERY = """
    SELECT
        i.id, i.name, i.description, i.price, i.quantity, i.supplier_id,
        s.name AS supplier_name, s.contactInfo, s.address, s.email, s.phone
    FROM stock_items i
    LEFT JOIN suppliers s ON i.supplier_id = s.id
"""


def _stock_item_from_row(row):
    supplier = None
    if row["supplier_id"] is not None:
        # a dangling supplier_id leaves the joined fields as None
        supplier = Supplier(
            id=row["supplier_id"],
            name=row["supplier_name"],
            contact_info=row["contactInfo"],
            address=row["address"],
            email=row["email"],
            phone=row["phone"],
        )
    return StockItem(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        price=float(row["price"]),
        quantity=int(row["quantity"]),
        supplier=supplier,
    )


def get_all_stock_items():
    with _cursor("fetching stock items") as cur:
        cur.execute(STOCK_ITEM_QUERY + " ORDER BY i.rowid")
        rows = cur.fetchall()
    return [_stock_item_from_row(row) for row in rows]


def get_stock_item_by_id(item_id):
    with _cursor("fetching stock item") as cur:
        cur.execute(STOCK_ITEM_QUERY + " WHERE i.id=?", (item_id,))
        row = cur.fetchone()
    return _stock_item_from_row(row) if row else None


def save_stock_item(item):
    with _cursor("saving stock item") as cur:
        cur.execute(
            """
            INSERT INTO stock_items (id, name, description, price, quantity, supplier_id)
            VALUES (?,?,?,?,?,?)
            ON CONFLICT(id) DO UPDATE SET
                name=excluded.name,
                description=excluded.description,
                price=excluded.price,
                quantity=excluded.quantity,
                supplier_id=excluded.supplier_id
            """,
            (item.id, item.name, item.description, item.price, item.quantity, item.supplier_id)
        )


def delete_stock_item(item_id):
    with _cursor("deleting stock item") as cur:
        cur.execute("DELETE FROM stock_items WHERE id=?", (item_id,))
        return cur.rowcount > 0


def _like_pattern(text):
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search_stock_items(query):
    # SQLite LIKE is case-insensitive for ASCII
    pattern = _like_pattern(query)
    with _cursor("searching stock items") as cur:
        cur.execute(
            STOCK_ITEM_QUERY
            + " WHERE i.name LIKE ? ESCAPE '\\' OR i.description LIKE ? ESCAPE '\\' ORDER BY i.rowid",
            (pattern, pattern)
        )
        rows = cur.fetchall()
    return [_stock_item_from_row(row) for row in rows]


# --------- SUPPLIERS ----------
def _supplier_from_row(row):
    return Supplier(
        id=row["id"],
        name=row["name"],
        contact_info=row["contactInfo"],
        address=row["address"],
        email=row["email"],
        phone=row["phone"],
    )


def get_all_suppliers():
    with _cursor("fetching suppliers") as cur:
        cur.execute("SELECT * FROM suppliers ORDER BY rowid")
        rows = cur.fetchall()
    return [_supplier_from_row(row) for row in rows]


def get_supplier_by_id(supplier_id):
    with _cursor("fetching supplier") as cur:
        cur.execute("SELECT * FROM suppliers WHERE id=?", (supplier_id,))
        row = cur.fetchone()
    return _supplier_from_row(row) if row else None


def save_supplier(supplier):
    with _cursor("saving supplier") as cur:
        cur.execute(
            """
            INSERT INTO suppliers (id, name, contactInfo, address, email, phone)
            VALUES (?,?,?,?,?,?)
            ON CONFLICT(id) DO UPDATE SET
                name=excluded.name,
                contactInfo=excluded.contactInfo,
                address=excluded.address,
                email=excluded.email,
                phone=excluded.phone
            """,
            (supplier.id, supplier.name, supplier.contact_info, supplier.address,
             supplier.email, supplier.phone)
        )


def count_stock_items_for_supplier(supplier_id):
    with _cursor("counting supplier items") as cur:
        cur.execute("SELECT COUNT(*) FROM stock_items WHERE supplier_id=?", (supplier_id,))
        return cur.fetchone()[0]


def delete_supplier(supplier_id):
    """
    Delete a supplier unless a stock item still points at it.
    Raises SupplierInUseError in that case; an unknown id is a no-op.
    """
    with _cursor("deleting supplier") as cur:
        cur.execute(
            """
            DELETE FROM suppliers
            WHERE id=? AND NOT EXISTS (SELECT 1 FROM stock_items WHERE supplier_id=?)
            """,
            (supplier_id, supplier_id)
        )
        deleted = cur.rowcount > 0
        in_use = 0
        if not deleted:
            cur.execute("SELECT COUNT(*) FROM stock_items WHERE supplier_id=?", (supplier_id,))
            in_use = cur.fetchone()[0]
    if in_use:
        logger.warning("Refused to delete supplier %s: used by %d stock item(s)", supplier_id, in_use)
        raise SupplierInUseError("Cannot delete supplier: it is used by one or more stock items")
    return deleted


# --------- USERS ----------
def _parse_timestamp(value):
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Unreadable timestamp %r", value)
        return None


def _user_from_row(row):
    return User(
        id=row["id"],
        username=row["username"],
        password=row["password"],
        full_name=row["fullName"],
        email=row["email"],
        role=row["role"],
        created_at=_parse_timestamp(row["created_at"]),
    )


def get_all_users():
    with _cursor("fetching users") as cur:
        cur.execute("SELECT * FROM users ORDER BY rowid")
        rows = cur.fetchall()
    return [_user_from_row(row) for row in rows]


def get_user_by_id(user_id):
    with _cursor("fetching user") as cur:
        cur.execute("SELECT * FROM users WHERE id=?", (user_id,))
        row = cur.fetchone()
    return _user_from_row(row) if row else None


def get_user_by_username(username):
    with _cursor("fetching user") as cur:
        cur.execute("SELECT * FROM users WHERE username=?", (username,))
        row = cur.fetchone()
    return _user_from_row(row) if row else None


def username_exists(username):
    with _cursor("checking username") as cur:
        cur.execute("SELECT COUNT(*) FROM users WHERE username=?", (username,))
        return cur.fetchone()[0] > 0


def save_user(user):
    created_at = user.created_at.strftime("%Y-%m-%d %H:%M:%S") if user.created_at else None
    with _cursor("saving user") as cur:
        cur.execute(
            """
            INSERT INTO users (id, username, password, fullName, email, role, created_at)
            VALUES (?,?,?,?,?,?,COALESCE(?, CURRENT_TIMESTAMP))
            ON CONFLICT(id) DO UPDATE SET
                username=excluded.username,
                password=excluded.password,
                fullName=excluded.fullName,
                email=excluded.email,
                role=excluded.role
            """,
            (user.id, user.username, user.password, user.full_name, user.email, user.role, created_at)
        )


def delete_user(user_id):
    with _cursor("deleting user") as cur:
        cur.execute("DELETE FROM users WHERE id=?", (user_id,))
        return cur.rowcount > 0
