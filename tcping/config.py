from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised before any probing starts when the run cannot be configured."""


@dataclass
class Settings:
    count: int = 16                 # attempts per host
    timeout: float = 10.0           # seconds per connect attempt
    port: int = 80                  # appended when a host carries no port
    threads: int = 1                # worker pool size
    hosts: tuple[str, ...] = ()

    # 0 means unbounded; otherwise producers block once this many outcomes wait
    sink_size: int = 0

    def validate(self) -> "Settings":
        if not self.hosts:
            raise ConfigurationError("No Endpoints given")
        if self.count < 0:
            raise ConfigurationError(f"count must be >= 0, got {self.count}")
        if self.timeout < 0:
            raise ConfigurationError(f"timeout must be >= 0, got {self.timeout}")
        if self.threads < 1:
            raise ConfigurationError(f"threads must be >= 1, got {self.threads}")
        if not 0 <= self.port <= 65535:
            raise ConfigurationError(f"port out of range: {self.port}")
        if self.sink_size < 0:
            raise ConfigurationError(f"sink_size must be >= 0, got {self.sink_size}")
        return self
