from pyprovider.boot import Settings, run_web
from pyprovider.toggle import Usage
import dotenv


if __name__ == "__main__":
    dotenv.load_dotenv()
    run_web(Usage, settings=Settings.from_env())
