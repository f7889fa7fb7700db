"""
Task tracker TUI - list, add and cycle the status of tasks.

Architecture:
- providers.py: Data model (Status, Task) and the store protocol
- state_provider.py: JSON file store
- form.py / controller.py: Input form and view state machine (no terminal)
- views/: Textual screen/widget components
- app.py: Main application entry point
"""
