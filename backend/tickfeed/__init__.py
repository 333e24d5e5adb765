"""tickfeed: simulated real-time market-data feed."""
