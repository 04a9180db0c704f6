"""
Anniverswordlary Game Server - Main Entry Point

This is the main entry point for the game server.
It initializes all services and starts the Flask-SocketIO application.
"""

from anniverswordlary import create_app
from anniverswordlary.config import Config, validate_word_list_integrity
from anniverswordlary.services.game_service import initialize_game_service
from anniverswordlary.services.hint_service import initialize_hint_service
from anniverswordlary.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        validate_word_list_integrity()

        # Initialize game service
        game_service = initialize_game_service(Config.TARGET_WORD)
        if game_service:
            print("✓ Game service initialized successfully")
        else:
            print("✗ Failed to initialize game service")

        # Initialize hint service
        hint_service = initialize_hint_service(
            Config.GEMINI_API_KEY, Config.GEMINI_MODEL, Config.HINT_TIMEOUT_SECONDS
        )
        if hint_service.enabled:
            print("✓ Hint service initialized successfully")
        else:
            print("✗ GEMINI_API_KEY not configured, hints will use fallback text")

        # Create Flask app
        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Anniverswordlary server starting")

        print(f"\nStarting game server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Hints available: {hint_service.enabled}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Anniverswordlary server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
