import customtkinter as ctk

from db import StorageError
from gui_utils import add_form_row, show_popup_error, show_popup_info
from validators import ValidationError, validate_registration


class LoginWindow(ctk.CTk):
    def __init__(self, session):
        super().__init__()
        self.title("Stock Manager Login")
        self.geometry("420x420")
        self.session = session
        self.build_ui()

    def build_ui(self):
        ctk.CTkLabel(self, text="Stock Manager", font=("Arial", 20, "bold")).pack(pady=10)
        tabs = ctk.CTkTabview(self)
        tabs.pack(fill="both", expand=True, padx=10, pady=10)

        login_tab = tabs.add("Login")
        self.ent_user = add_form_row(login_tab, 0, "Username:")
        self.ent_pass = add_form_row(login_tab, 1, "Password:", show="*")
        self.ent_pass.bind("<Return>", lambda e: self.try_login())
        ctk.CTkButton(login_tab, text="Login", command=self.try_login).grid(row=2, column=0, columnspan=2, pady=10)

        register_tab = tabs.add("Register")
        self.reg_user = add_form_row(register_tab, 0, "Username:")
        self.reg_pass = add_form_row(register_tab, 1, "Password:", show="*")
        self.reg_confirm = add_form_row(register_tab, 2, "Confirm password:", show="*")
        self.reg_name = add_form_row(register_tab, 3, "Full name:")
        self.reg_email = add_form_row(register_tab, 4, "Email:")
        ctk.CTkButton(register_tab, text="Register", command=self.try_register).grid(row=5, column=0, columnspan=2, pady=10)

    def try_login(self):
        try:
            user = self.session.login(self.ent_user.get().strip(), self.ent_pass.get())
        except StorageError as e:
            show_popup_error(str(e), "Login Error")
            return
        if user:
            self.finish()
        else:
            show_popup_error("Invalid username or password", "Login Failed")

    def try_register(self):
        try:
            username = validate_registration(self.reg_user.get(), self.reg_pass.get(), self.reg_confirm.get())
            user = self.session.register(username, self.reg_pass.get(),
                                         self.reg_name.get().strip(), self.reg_email.get().strip())
        except (ValidationError, StorageError) as e:
            show_popup_error(str(e), "Registration Error")
            return
        if user:
            show_popup_info("Registration successful!", "Success")
            self.finish()
        else:
            show_popup_error("Registration failed. Username may already be taken.", "Registration Error")

    def finish(self):
        # returns control to main.py, which opens the dashboard
        self.destroy()
