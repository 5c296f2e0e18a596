"""Risk Advisor – command-line entry points."""
