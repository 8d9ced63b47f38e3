class PageTable:
    """Resident pages of one process, keyed by page number."""

    def __init__(self, process_id):
        self.process_id = process_id
        self.entries = {}  # page_number -> frame index
        self.page_faults = 0

    def lookup(self, page_number):
        return self.entries.get(page_number)

    def insert(self, page_number, frame_num):
        self.entries[page_number] = frame_num

    def remove(self, page_number):
        del self.entries[page_number]

    def record_fault(self):
        self.page_faults += 1

    def fault_count(self):
        return self.page_faults

    def items(self):
        return self.entries.items()

    def __contains__(self, page_number):
        return page_number in self.entries

    def __len__(self):
        return len(self.entries)
