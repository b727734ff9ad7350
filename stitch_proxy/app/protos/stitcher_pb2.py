# -*- coding: utf-8 -*-
# Generated by the protocol buffer compiler.  DO NOT EDIT!
# source: stitch_proxy/app/protos/stitcher.proto
"""Generated protocol buffer code."""
from google.protobuf.internal import builder as _builder
from google.protobuf import descriptor as _descriptor
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf import symbol_database as _symbol_database
# @@protoc_insertion_point(imports)

_sym_db = _symbol_database.Default()




DESCRIPTOR = _descriptor_pool.Default().AddSerializedFile(b'\n&stitch_proxy/app/protos/stitcher.proto\x12\x08stitcher\".\n\tImageData\x12\x10\n\x08\x66ilename\x18\x01 \x01(\t\x12\x0f\n\x07\x63ontent\x18\x02 \x01(\x0c\"Q\n\rStitchRequest\x12#\n\x06images\x18\x01 \x03(\x0b\x32\x13.stitcher.ImageData\x12\x0e\n\x06\x66ormat\x18\x02 \x01(\t\x12\x0b\n\x03key\x18\x03 \x01(\t\"M\n\x0eStitchResponse\x12\x14\n\x0c\x63ontent_type\x18\x01 \x01(\t\x12\x10\n\x08\x66ilename\x18\x02 \x01(\t\x12\x13\n\x0bimage_bytes\x18\x03 \x01(\x0c\x32H\n\x08Stitcher\x12<\n\x07Process\x12\x17.stitcher.StitchRequest\x1a\x18.stitcher.StitchResponseb\x06proto3')

_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, globals())
_builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, 'stitch_proxy.app.protos.stitcher_pb2', globals())
if _descriptor._USE_C_DESCRIPTORS == False:

  DESCRIPTOR._options = None
  _IMAGEDATA._serialized_start=52
  _IMAGEDATA._serialized_end=98
  _STITCHREQUEST._serialized_start=100
  _STITCHREQUEST._serialized_end=181
  _STITCHRESPONSE._serialized_start=183
  _STITCHRESPONSE._serialized_end=260
  _STITCHER._serialized_start=262
  _STITCHER._serialized_end=334
# @@protoc_insertion_point(module_scope)
