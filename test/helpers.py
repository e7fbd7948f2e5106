"""Shared test doubles"""


class ScriptedRandom:
    """Stand-in random source returning a fixed sequence of draws"""

    def __init__(self, values, repeat_last=True):
        self.values = list(values)
        self.repeat_last = repeat_last
        self.calls = 0

    def random(self):
        if self.calls < len(self.values):
            value = self.values[self.calls]
        elif self.repeat_last and self.values:
            value = self.values[-1]
        else:
            raise AssertionError("ScriptedRandom ran out of values")
        self.calls += 1
        return value
