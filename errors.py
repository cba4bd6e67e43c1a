class HuffmanError(Exception): # base class for every failure raised by the codec
    pass

class CodeLookupError(HuffmanError, LookupError): # symbol missing from the code table
    pass

class MalformedPaddingError(HuffmanError, ValueError): # padding header missing, out of range, or longer than the payload
    pass

class DecodeError(HuffmanError, ValueError): # bits left over that match no code
    pass

class InternalInvariantError(HuffmanError, RuntimeError): # packer produced a bit count that is not a multiple of 8
    pass

class ContainerFormatError(HuffmanError, ValueError): # bad magic or truncated/inconsistent frequency header
    pass
