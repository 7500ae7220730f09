from schoolapp import create_app
import logging
import sys
import os

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = create_app()

if __name__ == '__main__':
    # Port from the command line, then PORT, then 5000
    port = int(sys.argv[1]) if len(sys.argv) > 1 else int(os.environ.get('PORT', 5000))

    # Enable hot reloading in development mode
    debug = os.environ.get('FLASK_DEBUG', '0') == '1'

    app.run(debug=debug, host=os.environ.get('HOST', '127.0.0.1'), port=port, use_reloader=debug)
