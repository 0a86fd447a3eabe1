"""Sports taxonomy, per-user sports and parameter presentation."""
