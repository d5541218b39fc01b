"""Timer services: phase engine, runner, pause and keyboard input, config."""
