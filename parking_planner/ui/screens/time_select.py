import tkinter as tk
import tkinter.messagebox as msg
from datetime import time
import customtkinter as ctk
from typing import Callable, Optional


class TimeSelectionView(ctk.CTkFrame):
    """Selector de horario (pasos de 15 min) con resumen y confirmación."""
    def __init__(self, master, controller: Optional[object] = None, on_change: Callable = None, **kwargs):
        super().__init__(master, **kwargs)
        self.controller = controller
        self.on_change = on_change
        self._build_ui()

    def _build_ui(self):
        self.title = ctk.CTkLabel(self, text="", font=ctk.CTkFont(size=18, weight="bold"))
        self.title.pack(anchor="nw", padx=16, pady=(12, 12))

        frm = ctk.CTkFrame(self)
        frm.pack(anchor="nw", padx=16, pady=8)
        hours = self.controller.hour_options()
        minutes = self.controller.minute_options()

        self.start_h, self.start_m = tk.StringVar(), tk.StringVar()
        self.end_h, self.end_m = tk.StringVar(), tk.StringVar()
        for row, (label, hv, mv) in enumerate((("Inicio", self.start_h, self.start_m), ("Fin", self.end_h, self.end_m))):
            ctk.CTkLabel(frm, text=label).grid(row=row, column=0, sticky="w", padx=6, pady=6)
            ctk.CTkOptionMenu(frm, values=hours, variable=hv, width=80).grid(row=row, column=1, padx=4)
            ctk.CTkLabel(frm, text=":").grid(row=row, column=2)
            ctk.CTkOptionMenu(frm, values=minutes, variable=mv, width=80).grid(row=row, column=3, padx=4)

        actions = ctk.CTkFrame(self)
        actions.pack(fill="x", padx=16, pady=(12, 12), side="bottom")
        ctk.CTkButton(actions, text="Confirmar", command=self._confirm, width=140).pack(side="right", padx=6)
        ctk.CTkButton(actions, text="Cancelar", command=self._cancel, fg_color="#999999", width=120).pack(side="right", padx=6)

    def on_show(self):
        self.title.configure(text=f"Seleccionar horario - {self.controller.space_code}")
        start, end = self.controller.default_times()
        self.start_h.set(f"{start.hour:02d}")
        self.start_m.set(f"{start.minute:02d}")
        self.end_h.set(f"{end.hour:02d}")
        self.end_m.set(f"{end.minute:02d}")

    def _selected(self):
        return (time(int(self.start_h.get()), int(self.start_m.get())),
                time(int(self.end_h.get()), int(self.end_m.get())))

    def _confirm(self):
        start, end = self._selected()
        if not msg.askyesno("Confirmar reserva", self.controller.summary(start, end), parent=self):
            return
        ok, text = self.controller.confirm(start, end)
        if ok:
            msg.showinfo("Reserva", text, parent=self)
            self.on_change()
        else:
            msg.showwarning("Reserva", text, parent=self)

    def _cancel(self):
        self.controller.back()
        self.on_change()
