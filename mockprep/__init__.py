"""MockPrep: mock interview practice API with answer evaluation and reports."""

__version__ = "1.0.0"
