"""HealthApp - personal health tracker with AI coaching."""
