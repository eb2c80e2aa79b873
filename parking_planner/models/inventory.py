from typing import List

SPACE_LETTERS = "ABCDEF"


class Inventory:
    """
    Inventario estático de espacios de estacionamiento.
    Cada sótano tiene la misma grilla filas x columnas; los códigos se derivan
    de la posición (número de dos dígitos + letra de columna), p.ej. '01A'.
    """

    def __init__(self, lots: int = 3, rows: int = 4, cols: int = 6):
        if lots < 1 or rows < 1 or cols < 1:
            raise ValueError("El inventario necesita al menos un sótano, una fila y una columna.")
        self.lot_count = lots
        self.rows = rows
        self.cols = cols
        self._codes = [self._code_for(r, c) for r in range(rows) for c in range(cols)]
        self._code_set = frozenset(self._codes)

    def _code_for(self, row: int, col: int) -> str:
        num = row * self.cols + col + 1
        return f"{num:02d}{SPACE_LETTERS[col % len(SPACE_LETTERS)]}"

    # ----------------------------
    # Consultas
    # ----------------------------
    @property
    def lots(self) -> List[int]:
        return list(range(1, self.lot_count + 1))

    def is_valid_lot(self, lot) -> bool:
        return isinstance(lot, int) and not isinstance(lot, bool) and 1 <= lot <= self.lot_count

    def spaces_for(self, lot) -> List[str]:
        """Devuelve los códigos del sótano en orden de fila; lista vacía si el sótano no existe."""
        if not self.is_valid_lot(lot):
            return []
        return list(self._codes)

    def grid_for(self, lot) -> List[List[str]]:
        """Códigos agrupados por fila, tal como se dibujan en el mapa."""
        codes = self.spaces_for(lot)
        return [codes[i:i + self.cols] for i in range(0, len(codes), self.cols)]

    def is_valid_space(self, lot, code) -> bool:
        return self.is_valid_lot(lot) and code in self._code_set

    def __repr__(self):
        return f"<Inventory: {self.lot_count} sótanos x {len(self._codes)} espacios>"
