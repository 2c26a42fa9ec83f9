"""FlowForge Generator command line interface."""
