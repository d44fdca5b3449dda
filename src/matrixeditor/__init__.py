"""Element relationship matrices with anti-diagonal symmetry."""
