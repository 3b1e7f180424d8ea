from .protocols.policies import POLICIES


def safe_int(value, key):
    """Parse an integer config value, naming the key on failure."""
    try:
        value = value.strip()
        return int(value, 16) if value.lower().startswith("0x") else int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}.") from None


class CacheConfig:
    def __init__(self, name, num_sets, associativity, line_size, latency, policy="LRU"):
        self.name = name
        self.num_sets = num_sets
        self.associativity = associativity
        self.line_size = line_size
        self.latency = latency
        self.policy = policy


class MemoryConfig:
    def __init__(self, name="MainMemory", latency=100, seed=None):
        self.name = name
        self.latency = latency
        self.seed = seed


class HierarchyConfig:
    """
    Cache hierarchy description. caches are listed closest to the processor first.
    """
    CACHE_HEADER = "Cache configuration"
    MEMORY_HEADER = "Main memory configuration"

    def __init__(self, caches, memory):
        self.caches = list(caches)
        self.memory = memory
        self.validate()

    @classmethod
    def from_config_file(cls, filepath):
        with open(filepath) as infile:
            return cls.from_lines(infile)

    @classmethod
    def from_lines(cls, lines):
        """
        Parse "Section header" and "Key: value" lines. Cache sections are named by the text
        after the header, e.g. "Cache configuration L1", and placed by their "Level" key,
        1 being closest to the processor. Sections may appear in any order.
        """
        # section name -> key/values, insertion order kept
        cache_sections = {}
        memory_section = None
        current = None
        for ln in lines:
            line = ln.strip()
            if not line or line.startswith("#"):
                continue

            # Enter a new section?
            if line.startswith(cls.CACHE_HEADER):
                name = line[len(cls.CACHE_HEADER):].strip()
                if not name:
                    raise ValueError("Cache configuration section needs a level name.")
                if name in cache_sections:
                    raise ValueError(f"Duplicate cache level: {name}")
                current = cache_sections[name] = {}
                continue
            if line == cls.MEMORY_HEADER:
                current = memory_section = {}
                continue

            # Regular "Key: value" inside a section
            if ":" in line and current is not None:
                key, val = line.split(":", 1)
                current[key.strip()] = val.strip()
                continue

            raise ValueError(f"Unexpected config line: {line!r}")

        if memory_section is None:
            raise ValueError("Config is missing the main memory section.")

        positions = {}
        for name, section in cache_sections.items():
            if "Level" not in section:
                raise ValueError(f"{name} is missing its Level key.")
            positions[name] = safe_int(section["Level"], f"{name} level")
        if sorted(positions.values()) != list(range(1, len(positions) + 1)):
            raise ValueError(f"Cache levels must be numbered 1 to {len(positions)} "
                             f"without gaps or repeats: {positions}")

        caches = []
        for name in sorted(cache_sections, key=positions.get):
            section = cache_sections[name]
            caches.append(CacheConfig(
                name=name,
                num_sets=safe_int(section.get("Number of sets", "1"), f"{name} number of sets"),
                associativity=safe_int(section.get("Set size", "1"), f"{name} set size"),
                line_size=safe_int(section.get("Line size", "64"), f"{name} line size"),
                latency=safe_int(section.get("Hit latency", "1"), f"{name} hit latency"),
                policy=section.get("Replacement policy", "LRU"),
            ))

        seed = memory_section.get("Random seed")
        memory = MemoryConfig(
            name=memory_section.get("Name", "MainMemory"),
            latency=safe_int(memory_section.get("Latency", "100"), "Main memory latency"),
            seed=safe_int(seed, "Random seed") if seed is not None else None,
        )
        return cls(caches, memory)

    def _validate_cache(self, cache):
        if cache.num_sets < 1:
            raise ValueError(f"{cache.name} number of sets must be positive.")
        if cache.associativity < 1:
            raise ValueError(f"{cache.name} associativity must be positive.")
        if cache.line_size < 1:
            raise ValueError(f"{cache.name} line size must be positive.")
        if cache.latency < 0:
            raise ValueError(f"{cache.name} hit latency must not be negative.")
        if cache.policy.strip().lower() not in POLICIES:
            raise ValueError(f"{cache.name} replacement policy must be one of LRU, FIFO or Random.")

    def validate(self):
        if not self.caches:
            raise ValueError("Config needs at least one cache level.")
        names = [cache.name for cache in self.caches] + [self.memory.name]
        if len(set(names)) != len(names):
            raise ValueError(f"Level names must be unique: {names}")
        for cache in self.caches:
            self._validate_cache(cache)
        if self.memory.latency < 0:
            raise ValueError("Main memory latency must not be negative.")

    @property
    def hierarchy(self):
        return [cache.name for cache in self.caches] + [self.memory.name]

    def __str__(self):
        print_str = ""
        for cache in self.caches:
            print_str += f"{cache.name} cache contains {cache.num_sets} sets.\n"
            print_str += f"Each set contains {cache.associativity} entries.\n"
            print_str += f"Each line is {cache.line_size} bytes.\n"
            print_str += f"Hit latency is {cache.latency} cycles.\n"
            print_str += f"The cache uses {cache.policy} replacement with write-back and write allocate.\n\n"
        print_str += f"{self.memory.name} latency is {self.memory.latency} cycles.\n"
        return print_str
