class FakeBook:
    def record(self, label, amount):
        pass
