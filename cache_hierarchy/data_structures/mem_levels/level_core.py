from abc import abstractmethod, ABC


class MemoryLevel(ABC):
    def __init__(self, name, lower_level=None):
        self.name = name
        self.lower_level = lower_level

    @abstractmethod
    def get_stats(self):
        return dict()

    @abstractmethod
    def load(self, address):
        raise NotImplementedError("This method should be overridden by subclasses")

    @abstractmethod
    def store(self, address):
        raise NotImplementedError("This method should be overridden by subclasses")
