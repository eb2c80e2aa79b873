import customtkinter as ctk
from typing import Callable, Optional


class SpaceMapView(ctk.CTkFrame):
    """Mapa de espacios del sótano elegido, un botón por código."""
    def __init__(self, master, controller: Optional[object] = None, on_change: Callable = None, **kwargs):
        super().__init__(master, **kwargs)
        self.controller = controller
        self.on_change = on_change
        self.title = ctk.CTkLabel(self, text="", font=ctk.CTkFont(size=18, weight="bold"))
        self.title.pack(anchor="nw", padx=16, pady=(12, 6))
        self.grid_frame = ctk.CTkScrollableFrame(self)
        self.grid_frame.pack(fill="both", expand=True, padx=12, pady=8)
        ctk.CTkButton(self, text="Volver", command=self._back, fg_color="#999999", width=120).pack(anchor="e", padx=16, pady=(0, 12))

    def on_show(self):
        self.title.configure(text=f"Mapa - Sótano {self.controller.lot}")
        for child in self.grid_frame.winfo_children():
            child.destroy()
        for r, row in enumerate(self.controller.spaces()):
            for c, code in enumerate(row):
                btn = ctk.CTkButton(self.grid_frame, text=code, width=100, height=60,
                                    command=lambda k=code: self._select(k))
                btn.grid(row=r, column=c, padx=5, pady=5)

    def _select(self, code):
        self.controller.select_space(code)
        self.on_change()

    def _back(self):
        self.controller.back()
        self.on_change()
