from abc import ABC, abstractmethod


class MetadataExtractor(ABC):
    @abstractmethod
    def process_file(self, file_path: str, filepath: str = None):
        pass

    @abstractmethod
    def write_to_file(self, output_path: str):
        pass

    @abstractmethod
    def extract_model(self):
        pass
