"""Infrastructure implementations for skill_mastery."""
