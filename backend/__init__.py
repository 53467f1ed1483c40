"""
Pullwise backend - login handoff and analysis proxy for the dashboard.

Provides a FastAPI app that completes GitHub/Supabase OAuth callbacks
and relays analysis prompts to Gemini.
"""
