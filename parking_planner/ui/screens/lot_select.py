import customtkinter as ctk
from typing import Callable, Optional


class LotSelectionView(ctk.CTkFrame):
    """Elegir sótano."""
    def __init__(self, master, controller: Optional[object] = None, on_change: Callable = None, **kwargs):
        super().__init__(master, **kwargs)
        self.controller = controller
        self.on_change = on_change
        ctk.CTkLabel(self, text="Seleccione el sótano", font=ctk.CTkFont(size=18, weight="bold")).pack(pady=(40, 16))
        self.buttons = ctk.CTkFrame(self)
        self.buttons.pack(anchor="center", pady=8)
        ctk.CTkButton(self, text="Volver", command=self._back, fg_color="#999999", width=120).pack(side="bottom", anchor="e", padx=16, pady=16)

    def on_show(self):
        for child in self.buttons.winfo_children():
            child.destroy()
        for lot in self.controller.inventory.lots:
            ctk.CTkButton(self.buttons, text=f"Sótano {lot}", width=140,
                          command=lambda n=lot: self._select(n)).pack(side="left", padx=8)

    def _select(self, lot):
        self.controller.select_lot(lot)
        self.on_change()

    def _back(self):
        self.controller.back()
        self.on_change()
