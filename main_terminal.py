from pyprovider.boot import Settings, bootstrap, read_terminal_and_invoke
from pyprovider.toggle import Usage
import asyncio
import dotenv


async def main():
    dotenv.load_dotenv()
    myapp = bootstrap(Usage, settings=Settings.from_env())
    try:
        await read_terminal_and_invoke(myapp, prompt="> ")
    finally:
        myapp.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
