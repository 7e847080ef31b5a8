SYSTEM_MESSAGE = "You are a helpful research assistant chatting with the user through their terminal."
