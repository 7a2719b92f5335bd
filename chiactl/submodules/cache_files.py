import logging

from os import path, remove, replace, makedirs
from shutil import move
from errno import EXDEV

from ..troubleshoot.errors import IOFailure

CACHE_FILE_NAMES = ["sub-epoch-summaries","height-to-hash"]


class CacheFiles():

    def __init__(self,root):
        self.log = logging.getLogger("chiactl")
        self.db_dir = path.join(root,"db")


    def get_active_path(self,file_name):
        return path.join(self.db_dir,file_name)


    def get_archive_dir(self,network):
        return path.join(self.db_dir,network)


    def get_archive_path(self,network,file_name):
        return path.join(self.get_archive_dir(network),file_name)


    def ensure_archive_dir(self,network):
        archive_dir = self.get_archive_dir(network)
        self.log.debug(f"ensuring directory exists for network cache files [{archive_dir}]")
        try:
            makedirs(archive_dir,mode=0o755,exist_ok=True)
        except OSError as e:
            raise IOFailure(f"error creating cache file directory [{archive_dir}] for network [{network}] [{e}]")
        return archive_dir


    def move_and_overwrite(self,source,destination):
        if not path.exists(source):
            self.log.debug(f"source path doesn't exist, skipping move | source [{source}] dest [{destination}]")
            return False

        try:
            if path.exists(destination):
                self.log.debug(f"destination file already exists, deleting [{destination}]")
                remove(destination)

            self.log.debug(f"moving file to destination | source [{source}] dest [{destination}]")
            try:
                replace(source,destination)
            except OSError as e:
                if e.errno != EXDEV: raise
                move(source,destination)
        except OSError as e:
            raise IOFailure(f"error moving [{source}] to [{destination}] [{e}]")

        self.log.debug(f"moved successfully | source [{source}] dest [{destination}]")
        return True


    def archive_active(self,network):
        # active -> db/<network>/
        moved = []
        for file_name in CACHE_FILE_NAMES:
            if self.move_and_overwrite(self.get_active_path(file_name),self.get_archive_path(network,file_name)):
                moved.append(file_name)
        return moved


    def restore_archived(self,network):
        # db/<network>/ -> active
        moved = []
        for file_name in CACHE_FILE_NAMES:
            if self.move_and_overwrite(self.get_archive_path(network,file_name),self.get_active_path(file_name)):
                moved.append(file_name)
        return moved
