"""Risk Advisor – core configuration, logging and error types."""
