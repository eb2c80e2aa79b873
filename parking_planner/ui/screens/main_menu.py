import customtkinter as ctk
from typing import Callable, Optional


class MainMenuView(ctk.CTkFrame):
    """Menú principal: reservar, ver reservas (admin/docente) y cerrar sesión."""
    def __init__(self, master, controller: Optional[object] = None, on_change: Callable = None, **kwargs):
        super().__init__(master, **kwargs)
        self.controller = controller
        self.on_change = on_change
        self.welcome = ctk.CTkLabel(self, text="", font=ctk.CTkFont(size=18, weight="bold"), justify="left")
        self.welcome.pack(anchor="nw", padx=16, pady=(16, 24))
        self.buttons = ctk.CTkFrame(self)
        self.buttons.pack(anchor="center", pady=12)

    def on_show(self):
        member = self.controller.member
        if member is None:
            return
        self.welcome.configure(text=f"Bienvenido, {member.display_name}\nCategoría: {member.role.value}")

        for child in self.buttons.winfo_children():
            child.destroy()
        ctk.CTkButton(self.buttons, text="Reservar espacio", command=self._reserve, width=180).pack(side="left", padx=8)
        if self.controller.can_view_reservations:
            ctk.CTkButton(self.buttons, text="Ver reservas", command=self._view, width=180).pack(side="left", padx=8)
        ctk.CTkButton(self.buttons, text="Cerrar sesión", command=self._logout, fg_color="#999999",
                      width=140).pack(side="left", padx=8)

    def _reserve(self):
        self.controller.start_reservation()
        self.on_change()

    def _view(self):
        self.controller.view_reservations()
        self.on_change()

    def _logout(self):
        self.controller.logout()
        self.on_change()
