"""Real-time path: rules, notification routing and audio output."""
