from dotenv import load_dotenv
load_dotenv()

from votely import create_app  # noqa: E402

application = create_app()

if __name__ == "__main__":
    application.run(debug=application.config.get("DEBUG", False))
