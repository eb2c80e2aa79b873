import tkinter as tk
import tkinter.ttk as ttk
import tkinter.messagebox as msg
import customtkinter as ctk
from typing import Callable, Optional

from parking_planner.ui.controller import TABLE_HEADINGS


class ReservationsView(ctk.CTkFrame):
    """Tabla de reservas registradas (solo admin/docente)."""
    def __init__(self, master, controller: Optional[object] = None, on_change: Callable = None, **kwargs):
        super().__init__(master, **kwargs)
        self.controller = controller
        self.on_change = on_change
        self._build_ui()

    def _build_ui(self):
        header_row = ctk.CTkFrame(self)
        header_row.pack(fill="x", padx=16, pady=12)
        ctk.CTkLabel(header_row, text="Reservas registradas", font=ctk.CTkFont(size=18, weight="bold")).pack(side="left")
        ctk.CTkButton(header_row, text="Volver", command=self._back, width=120).pack(side="right")

        container = tk.Frame(self)
        container.pack(fill="both", expand=True, padx=12, pady=8)
        columns = tuple(f"c{i}" for i in range(len(TABLE_HEADINGS)))
        col_widths = (200, 160, 90, 60, 70, 90, 60, 60)

        self.tree = ttk.Treeview(container, columns=columns, show="headings", selectmode="browse", height=14)
        for col, head, w in zip(columns, TABLE_HEADINGS, col_widths):
            self.tree.heading(col, text=head)
            self.tree.column(col, width=w, anchor="w")

        vsb = ttk.Scrollbar(container, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        container.grid_rowconfigure(0, weight=1)
        container.grid_columnconfigure(0, weight=1)

    def on_show(self):
        self.tree.delete(*self.tree.get_children())
        rows, error = self.controller.reservation_rows()
        if error:
            msg.showerror("Reservas", error, parent=self)
        for row in rows:
            self.tree.insert("", "end", values=row)

    def _back(self):
        self.controller.back()
        self.on_change()
