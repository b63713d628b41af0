import logging
from tkinter import ttk

import customtkinter as ctk

import analytics
import db
from charts import format_currency
from db import StorageError, SupplierInUseError
from gui_utils import (add_form_row, draw_bar_chart, draw_column_chart, draw_pie_chart,
                       make_chart_canvas, set_entry, show_popup_error, show_popup_info,
                       show_popup_question, show_popup_warning)
from models import StockItem, Supplier
from validators import (ValidationError, validate_password_change, validate_stock_form,
                        validate_supplier_form)

logger = logging.getLogger(__name__)


def make_tree(parent, columns, height=15):
    tree = ttk.Treeview(parent, columns=columns, show="headings", height=height)
    for col in columns:
        tree.heading(col, text=col)
        tree.column(col, width=110)
    tree.pack(fill="both", expand=True, padx=10, pady=5)
    return tree


def clear_tree(tree):
    for row in tree.get_children():
        tree.delete(row)


class Dashboard(ctk.CTk):
    def __init__(self, session, config):
        super().__init__()
        self.session = session
        self.threshold = config['LOW_STOCK_THRESHOLD']
        self.currency = config['CURRENCY_SYMBOL']
        self.title("Stock Manager")
        self.geometry("1200x800")
        self.build_ui()
        self.refresh_all()

    def money(self, value):
        return format_currency(value, self.currency)

    def build_ui(self):
        user = self.session.current_user
        header = ctk.CTkFrame(self)
        header.pack(fill="x", padx=10, pady=5)
        ctk.CTkLabel(header, text=f"Welcome {user.full_name or user.username}",
                     font=("Arial", 16)).pack(side="left", padx=10)
        ctk.CTkButton(header, text="Logout", width=90, command=self.logout).pack(side="right", padx=5)
        ctk.CTkButton(header, text="Refresh", width=90, command=self.refresh_all).pack(side="right", padx=5)

        self.tabs = ctk.CTkTabview(self)
        self.tabs.pack(fill="both", expand=True, padx=10, pady=5)
        self.build_overview(self.tabs.add("Dashboard"))
        self.build_stock(self.tabs.add("Stock"))
        self.build_suppliers(self.tabs.add("Suppliers"))
        self.build_analytics(self.tabs.add("Analytics"))
        self.build_profile(self.tabs.add("Profile"))
        if self.session.is_admin:
            self.build_users(self.tabs.add("Users"))

    # ---------- DASHBOARD ----------
    def build_overview(self, tab):
        cards = ctk.CTkFrame(tab)
        cards.pack(fill="x", padx=10, pady=10)
        self.lbl_items = self._card(cards, "Total Items")
        self.lbl_value = self._card(cards, "Inventory Value")
        self.lbl_low = self._card(cards, f"Low Stock (< {self.threshold})")

        ctk.CTkLabel(tab, text="Low stock items", font=("Arial", 14, "bold")).pack(anchor="w", padx=10)
        self.low_tree = make_tree(tab, ("Name", "Quantity", "Supplier"), height=6)
        self.sales_canvas = make_chart_canvas(tab, height=260)
        self.sales_canvas.bind("<Configure>", lambda e: self.draw_sales())

    def _card(self, parent, title):
        frame = ctk.CTkFrame(parent)
        frame.pack(side="left", expand=True, fill="x", padx=10, pady=5)
        ctk.CTkLabel(frame, text=title).pack(pady=(10, 0))
        value = ctk.CTkLabel(frame, text="-", font=("Arial", 22, "bold"))
        value.pack(pady=(0, 10))
        return value

    def refresh_overview(self, items):
        stats = analytics.summary(self.threshold, items)
        self.lbl_items.configure(text=str(stats["item_count"]))
        self.lbl_value.configure(text=self.money(stats["total_value"]))
        self.lbl_low.configure(text=str(stats["low_stock_count"]))
        clear_tree(self.low_tree)
        for item in analytics.low_stock_items(self.threshold, items):
            self.low_tree.insert("", "end", values=(item.name, f"{item.quantity} left", item.supplier_name or ""))
        self.draw_sales()

    def draw_sales(self):
        draw_column_chart(self.sales_canvas, "Monthly Sales", analytics.monthly_sales(), self.currency)

    # ---------- STOCK ----------
    def build_stock(self, tab):
        bar = ctk.CTkFrame(tab)
        bar.pack(fill="x", padx=10, pady=5)
        self.search_var = ctk.StringVar()
        search = ctk.CTkEntry(bar, textvariable=self.search_var, width=300, placeholder_text="Search name or description")
        search.pack(side="left", padx=5)
        search.bind("<Return>", lambda e: self.load_stock())
        ctk.CTkButton(bar, text="Search", width=80, command=self.load_stock).pack(side="left", padx=5)
        ctk.CTkButton(bar, text="Delete", width=80, command=self.delete_stock).pack(side="right", padx=5)
        ctk.CTkButton(bar, text="Edit", width=80, command=self.edit_stock).pack(side="right", padx=5)
        ctk.CTkButton(bar, text="Add", width=80, command=self.add_stock).pack(side="right", padx=5)
        self.stock_tree = make_tree(tab, ("ID", "Name", "Description", "Price", "Qty", "Total", "Supplier"))
        self.stock_tree.bind("<Double-1>", lambda e: self.edit_stock())

    def load_stock(self, items=None):
        query = self.search_var.get().strip()
        try:
            if query:
                items = db.search_stock_items(query)
            elif items is None:
                items = db.get_all_stock_items()
        except StorageError as e:
            show_popup_error(str(e))
            return
        clear_tree(self.stock_tree)
        for item in items:
            self.stock_tree.insert("", "end", iid=item.id, values=(
                item.id, item.name, item.description, self.money(item.price), item.quantity,
                self.money(item.total_value), item.supplier_name or ""))

    def selected_stock_item(self):
        selected = self.stock_tree.focus()
        if not selected:
            show_popup_warning("Please select an item first.")
            return None
        try:
            return db.get_stock_item_by_id(selected)
        except StorageError as e:
            show_popup_error(str(e))
            return None

    def add_stock(self):
        StockForm(self, None, self.refresh_all)

    def edit_stock(self):
        item = self.selected_stock_item()
        if item:
            StockForm(self, item, self.refresh_all)

    def delete_stock(self):
        item = self.selected_stock_item()
        if not item:
            return
        if not show_popup_question(f"Delete '{item.name}'?", "Confirm Delete"):
            return
        try:
            db.delete_stock_item(item.id)
        except StorageError as e:
            show_popup_error(str(e))
            return
        self.refresh_all()

    # ---------- SUPPLIERS ----------
    def build_suppliers(self, tab):
        bar = ctk.CTkFrame(tab)
        bar.pack(fill="x", padx=10, pady=5)
        ctk.CTkButton(bar, text="Delete", width=80, command=self.delete_supplier).pack(side="right", padx=5)
        ctk.CTkButton(bar, text="Edit", width=80, command=self.edit_supplier).pack(side="right", padx=5)
        ctk.CTkButton(bar, text="Add", width=80, command=lambda: SupplierForm(self, None, self.refresh_all)).pack(side="right", padx=5)
        self.supplier_tree = make_tree(tab, ("ID", "Name", "Contact", "Address", "Email", "Phone", "Items"))
        self.supplier_tree.bind("<Double-1>", lambda e: self.edit_supplier())

    def load_suppliers(self, items):
        suppliers = db.get_all_suppliers()
        counts = {}
        for item in items:
            counts[item.supplier_id] = counts.get(item.supplier_id, 0) + 1
        clear_tree(self.supplier_tree)
        for s in suppliers:
            self.supplier_tree.insert("", "end", iid=s.id, values=(
                s.id, s.name, s.contact_info or "", s.address or "", s.email or "", s.phone or "",
                counts.get(s.id, 0)))

    def selected_supplier(self):
        selected = self.supplier_tree.focus()
        if not selected:
            show_popup_warning("Please select a supplier first.")
            return None
        try:
            return db.get_supplier_by_id(selected)
        except StorageError as e:
            show_popup_error(str(e))
            return None

    def edit_supplier(self):
        supplier = self.selected_supplier()
        if supplier:
            SupplierForm(self, supplier, self.refresh_all)

    def delete_supplier(self):
        supplier = self.selected_supplier()
        if not supplier:
            return
        if not show_popup_question(f"Delete supplier '{supplier.name}'?", "Confirm Delete"):
            return
        try:
            db.delete_supplier(supplier.id)
        except SupplierInUseError as e:
            show_popup_error(str(e), "Cannot Delete")
            return
        except StorageError as e:
            show_popup_error(str(e))
            return
        self.refresh_all()

    # ---------- ANALYTICS ----------
    def build_analytics(self, tab):
        charts = ctk.CTkTabview(tab)
        charts.pack(fill="both", expand=True)
        self.supplier_canvas = make_chart_canvas(charts.add("By Supplier"))
        self.category_canvas = make_chart_canvas(charts.add("By Category"))
        self.levels_canvas = make_chart_canvas(charts.add("Inventory Levels"))
        self.monthly_canvas = make_chart_canvas(charts.add("Monthly Sales"))
        self.chart_items = []
        for canvas in (self.supplier_canvas, self.category_canvas, self.levels_canvas, self.monthly_canvas):
            canvas.bind("<Configure>", lambda e: self.draw_charts())

    def draw_charts(self):
        items = self.chart_items
        draw_pie_chart(self.supplier_canvas, "Inventory Value by Supplier",
                       analytics.value_by_supplier(items), self.currency)
        draw_bar_chart(self.category_canvas, "Inventory Value by Category",
                       analytics.inventory_value_by_category(), self.money, show_percent=True)
        draw_bar_chart(self.levels_canvas, "Current Stock Levels",
                       analytics.inventory_levels(items), lambda q: f"{q} units")
        draw_column_chart(self.monthly_canvas, "Sales by Month", analytics.monthly_sales(), self.currency)

    # ---------- PROFILE ----------
    def build_profile(self, tab):
        user = self.session.current_user
        form = ctk.CTkFrame(tab)
        form.pack(padx=10, pady=10, anchor="n")
        ctk.CTkLabel(form, text="Username:").grid(row=0, column=0, sticky="w", padx=10, pady=4)
        ctk.CTkLabel(form, text=user.username).grid(row=0, column=1, sticky="w", padx=10, pady=4)
        ctk.CTkLabel(form, text="Role:").grid(row=1, column=0, sticky="w", padx=10, pady=4)
        ctk.CTkLabel(form, text=user.role).grid(row=1, column=1, sticky="w", padx=10, pady=4)
        self.ent_full_name = add_form_row(form, 2, "Full name:")
        self.ent_email = add_form_row(form, 3, "Email:")
        set_entry(self.ent_full_name, user.full_name)
        set_entry(self.ent_email, user.email)
        ctk.CTkButton(form, text="Update Profile", command=self.update_profile).grid(row=4, column=0, columnspan=2, pady=10)

        self.ent_old_pass = add_form_row(form, 5, "Current password:", show="*")
        self.ent_new_pass = add_form_row(form, 6, "New password:", show="*")
        self.ent_confirm_pass = add_form_row(form, 7, "Confirm password:", show="*")
        ctk.CTkButton(form, text="Change Password", command=self.change_password).grid(row=8, column=0, columnspan=2, pady=10)

    def update_profile(self):
        try:
            ok = self.session.update_profile(self.ent_full_name.get().strip(), self.ent_email.get().strip())
        except StorageError as e:
            show_popup_error(str(e))
            return
        if ok:
            show_popup_info("Profile updated successfully.", "Success")
        else:
            show_popup_error("Failed to update profile.")

    def change_password(self):
        old, new, confirm = self.ent_old_pass.get(), self.ent_new_pass.get(), self.ent_confirm_pass.get()
        try:
            validate_password_change(old, new, confirm)
            ok = self.session.change_password(old, new)
        except (ValidationError, StorageError) as e:
            show_popup_error(str(e))
            return
        if ok:
            for entry in (self.ent_old_pass, self.ent_new_pass, self.ent_confirm_pass):
                set_entry(entry, "")
            show_popup_info("Password changed successfully.", "Success")
        else:
            show_popup_error("Failed to change password. Make sure your current password is correct.")

    # ---------- USERS (admin) ----------
    def build_users(self, tab):
        bar = ctk.CTkFrame(tab)
        bar.pack(fill="x", padx=10, pady=5)
        ctk.CTkButton(bar, text="Delete", width=80, command=self.delete_user).pack(side="right", padx=5)
        self.user_tree = make_tree(tab, ("ID", "Username", "Full name", "Email", "Role", "Created"))

    def load_users(self):
        clear_tree(self.user_tree)
        for u in db.get_all_users():
            created = u.created_at.strftime("%Y-%m-%d %H:%M") if u.created_at else ""
            self.user_tree.insert("", "end", iid=u.id, values=(
                u.id, u.username, u.full_name or "", u.email or "", u.role, created))

    def delete_user(self):
        selected = self.user_tree.focus()
        if not selected:
            show_popup_warning("Please select a user first.")
            return
        if selected == self.session.current_user.id:
            show_popup_warning("You cannot delete your own account.")
            return
        if not show_popup_question("Delete this user?", "Confirm Delete"):
            return
        try:
            db.delete_user(selected)
            self.load_users()
        except StorageError as e:
            show_popup_error(str(e))

    # ---------- COMMON ----------
    def refresh_all(self):
        try:
            items = db.get_all_stock_items()
            self.refresh_overview(items)
            self.load_stock(items)
            self.load_suppliers(items)
            self.chart_items = items
            self.draw_charts()
            if self.session.is_admin:
                self.load_users()
        except StorageError as e:
            show_popup_error(str(e))

    def logout(self):
        if not show_popup_question("Log out?", "Logout"):
            return
        self.session.logout()
        self.destroy()


class StockForm(ctk.CTkToplevel):
    def __init__(self, master, item, on_saved):
        super().__init__(master)
        self.item = item
        self.on_saved = on_saved
        self.title("Edit Stock Item" if item else "Add Stock Item")
        self.geometry("460x360")
        self.grab_set()
        try:
            self.suppliers = db.get_all_suppliers()
        except StorageError as e:
            show_popup_error(str(e))
            self.suppliers = []
        self.build_ui()

    def build_ui(self):
        self.ent_name = add_form_row(self, 0, "Name:")
        self.ent_desc = add_form_row(self, 1, "Description:")
        self.ent_price = add_form_row(self, 2, "Price:")
        self.ent_qty = add_form_row(self, 3, "Quantity:")
        ctk.CTkLabel(self, text="Supplier:").grid(row=4, column=0, sticky="w", padx=10, pady=4)
        names = [self._supplier_label(s) for s in self.suppliers] or ["(no suppliers)"]
        self.supplier_var = ctk.StringVar(value="")
        ctk.CTkOptionMenu(self, values=names, variable=self.supplier_var).grid(row=4, column=1, sticky="ew", padx=10, pady=4)
        ctk.CTkButton(self, text="Save", command=self.save).grid(row=5, column=0, columnspan=2, pady=15)

        if self.item:
            set_entry(self.ent_name, self.item.name)
            set_entry(self.ent_desc, self.item.description)
            set_entry(self.ent_price, f"{self.item.price:.2f}")
            set_entry(self.ent_qty, self.item.quantity)
            for s in self.suppliers:
                if s.id == self.item.supplier_id:
                    self.supplier_var.set(self._supplier_label(s))

    @staticmethod
    def _supplier_label(supplier):
        return f"{supplier.name} ({supplier.id})"

    def selected_supplier(self):
        label = self.supplier_var.get()
        for s in self.suppliers:
            if self._supplier_label(s) == label:
                return s
        return None

    def save(self):
        try:
            data = validate_stock_form(self.ent_name.get(), self.ent_desc.get(), self.ent_price.get(),
                                       self.ent_qty.get(), self.selected_supplier())
        except ValidationError as e:
            show_popup_error(str(e), "Validation Error")
            return
        if self.item:
            item = StockItem(id=self.item.id, **data)
        else:
            item = StockItem(**data)
        try:
            db.save_stock_item(item)
        except StorageError as e:
            show_popup_error(str(e))
            return
        logger.info("Saved stock item %s (%s)", item.id, item.name)
        show_popup_info("Item updated successfully." if self.item else "Item saved successfully.", "Success")
        self.destroy()
        self.on_saved()


class SupplierForm(ctk.CTkToplevel):
    def __init__(self, master, supplier, on_saved):
        super().__init__(master)
        self.supplier = supplier
        self.on_saved = on_saved
        self.title("Edit Supplier" if supplier else "Add Supplier")
        self.geometry("460x320")
        self.grab_set()
        self.build_ui()

    def build_ui(self):
        self.ent_name = add_form_row(self, 0, "Name:")
        self.ent_contact = add_form_row(self, 1, "Contact info:")
        self.ent_address = add_form_row(self, 2, "Address:")
        self.ent_email = add_form_row(self, 3, "Email:")
        self.ent_phone = add_form_row(self, 4, "Phone:")
        ctk.CTkButton(self, text="Save", command=self.save).grid(row=5, column=0, columnspan=2, pady=15)
        if self.supplier:
            set_entry(self.ent_name, self.supplier.name)
            set_entry(self.ent_contact, self.supplier.contact_info)
            set_entry(self.ent_address, self.supplier.address)
            set_entry(self.ent_email, self.supplier.email)
            set_entry(self.ent_phone, self.supplier.phone)

    def save(self):
        try:
            data = validate_supplier_form(self.ent_name.get(), self.ent_contact.get(), self.ent_address.get(),
                                          self.ent_email.get(), self.ent_phone.get())
        except ValidationError as e:
            show_popup_error(str(e), "Validation Error")
            return
        supplier = Supplier(id=self.supplier.id, **data) if self.supplier else Supplier(**data)
        try:
            db.save_supplier(supplier)
        except StorageError as e:
            show_popup_error(str(e))
            return
        logger.info("Saved supplier %s (%s)", supplier.id, supplier.name)
        self.destroy()
        self.on_saved()
