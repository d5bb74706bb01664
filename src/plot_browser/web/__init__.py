"""Web dashboard for browsing the plot catalog."""
