"""
Memory Manager for PocketCalc
Single memory register behind the M+, M-, MR and MC keys
"""


class MemoryStore:
    def __init__(self, value=0.0):
        self.value = float(value)

    def add(self, current):
        """Add value to memory (M+)"""
        self.value += current

    def subtract(self, current):
        """Subtract value from memory (M-)"""
        self.value -= current

    def recall(self):
        """Recall memory value (MR)"""
        return self.value

    def clear(self):
        """Clear memory (MC)"""
        self.value = 0.0

    def restore(self, value):
        """Set the register from a saved snapshot"""
        self.value = float(value)
