"""pypyr steps for the hr-ranker pipelines."""
