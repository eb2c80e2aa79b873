import tkinter as tk
import tkinter.messagebox as msg
import customtkinter as ctk
from typing import Callable, Optional


class LoginView(ctk.CTkFrame):
    """Pantalla de ingreso por correo institucional."""
    def __init__(self, master, controller: Optional[object] = None, on_change: Callable = None, **kwargs):
        super().__init__(master, **kwargs)
        self.controller = controller
        self.on_change = on_change
        self._build_ui()

    def _build_ui(self):
        title = ctk.CTkLabel(self, text="Ingrese su correo institucional", font=ctk.CTkFont(size=18, weight="bold"))
        title.pack(anchor="center", pady=(60, 12))

        self.email_var = tk.StringVar()
        entry = ctk.CTkEntry(self, textvariable=self.email_var, width=360)
        entry.pack(anchor="center", pady=6)
        entry.bind("<Return>", lambda _e: self._login())

        ctk.CTkButton(self, text="Ingresar", command=self._login, width=160).pack(anchor="center", pady=12)

        if self.controller is not None and self.controller.members.load_error:
            ctk.CTkLabel(self, text="No se pudo cargar el padrón de usuarios; nadie podrá ingresar.",
                         text_color="#cc3333").pack(anchor="center", pady=6)

    def on_show(self):
        self.email_var.set("")

    def _login(self):
        ok, reason = self.controller.login(self.email_var.get())
        if not ok:
            msg.showwarning("Ingreso", reason, parent=self)
            return
        self.on_change()
