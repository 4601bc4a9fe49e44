"""Storage keys. The ":v1" suffix is the only schema versioning there is."""

METRICS_KEY = "healthapp:metrics:v1"
GOALS_KEY = "healthapp:goals:v1"
PROFILE_KEY = "healthapp:profile:v1"
THEME_PREFERENCE_KEY = "healthapp:theme-preference:v1"
MEAL_LOGS_KEY = "healthapp:meal-logs:v1"
EXERCISE_LOGS_KEY = "healthapp:exercise-logs:v1"
TRACKING_READINGS_KEY = "healthapp:tracking:readings"
