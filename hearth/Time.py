class Time:
    """Frame timing, advanced once per frame by the runner."""

    def __init__(self):
        self.delta = 0.0  # seconds since the previous frame
        self.elapsed = 0.0
        self.frame = 0

    def tick(self, dt: float):
        self.delta = dt
        self.elapsed += dt
        self.frame += 1

    def __repr__(self):
        return f"Time(frame={self.frame}, delta={self.delta:.4f}, elapsed={self.elapsed:.4f})"
