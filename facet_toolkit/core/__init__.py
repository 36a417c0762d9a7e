"""UI-agnostic filter engine: data model, services and session store."""
