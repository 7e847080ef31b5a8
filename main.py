"""
Entry point script for the tool_chat application.
This allows running the app directly from the project root.
"""
from tool_chat.main import main

if __name__ == "__main__":
    main()
