"""Core Application Layer: wires providers, policy and configuration together."""
