import sys

from touchcam.core.logging import init_logger


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else "touchcam.json"
    init_logger()

    from touchcam.core.application import TouchCameraApp

    app = TouchCameraApp(config_path)
    app.run()


if __name__ == "__main__":
    main()
